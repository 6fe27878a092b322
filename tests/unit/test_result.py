import pytest

from src.domain.result import ErrorKind, Failure, Success, failure, success


def test_success_carries_payload_only():
    result = success({"id": 1})

    assert isinstance(result, Success)
    assert result.payload == {"id": 1}
    assert not hasattr(result, "kind")


def test_failure_carries_kind_only():
    result = failure(ErrorKind.NOT_AUTHORIZED)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.NOT_AUTHORIZED
    assert not hasattr(result, "payload")


def test_failure_rejects_plain_strings():
    with pytest.raises(TypeError):
        Failure(kind="NOT_AUTHORIZED")  # type: ignore[arg-type]


def test_envelopes_are_immutable():
    result = success(1)
    with pytest.raises(AttributeError):
        result.payload = 2  # type: ignore[misc]


def test_error_kind_values_are_external_codes():
    assert ErrorKind.NOT_AUTHORIZED.value == "NOT_AUTHORIZED"
    assert ErrorKind.INTERNAL_ERROR.value == "INTERNAL_ERROR"
    assert {k.value for k in ErrorKind} == {"NOT_AUTHORIZED", "INTERNAL_ERROR"}


def test_match_branches_exhaustively():
    def describe(result):
        match result:
            case Success(payload=payload):
                return f"ok:{payload}"
            case Failure(kind=kind):
                return f"err:{kind.value}"

    assert describe(success(5)) == "ok:5"
    assert describe(failure(ErrorKind.INTERNAL_ERROR)) == "err:INTERNAL_ERROR"

"""
Entry point dispatcher.

Maps an operation name to its account mutation through a static registry and
serializes the result envelope into MutationResponse. Holds no business logic
and never touches the repository directly.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, assert_never

from pydantic import BaseModel, ValidationError

from src.api.schemas import MutationResponse, SetUserRolesArgs, UserIdArgs
from src.components.accounts import (
    AccountService,
    LockUserInput,
    SetUserRolesInput,
    UnlockUserInput,
    run_lock_user,
    run_set_user_roles,
    run_unlock_user,
)
from src.domain.entities import Actor, UserView
from src.domain.result import Failure, Result, Success


ArgsT = TypeVar("ArgsT", bound=BaseModel)


class UnknownOperationError(LookupError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")


class InvalidArgumentsError(ValueError):
    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        self.operation = operation
        self.errors = errors
        super().__init__(f"Invalid arguments for {operation}")


def _lock_user(
    service: AccountService, actor: Actor | None, args: UserIdArgs
) -> Result[UserView]:
    return run_lock_user(LockUserInput(actor=actor, user_id=args.user_id), service)


def _unlock_user(
    service: AccountService, actor: Actor | None, args: UserIdArgs
) -> Result[UserView]:
    return run_unlock_user(UnlockUserInput(actor=actor, user_id=args.user_id), service)


def _set_user_roles(
    service: AccountService, actor: Actor | None, args: SetUserRolesArgs
) -> Result[UserView]:
    inp = SetUserRolesInput(actor=actor, user_id=args.user_id, roles=tuple(args.roles))
    return run_set_user_roles(inp, service)


@dataclass(frozen=True)
class Operation(Generic[ArgsT]):
    args_model: type[ArgsT]
    handler: Callable[[AccountService, Actor | None, ArgsT], Result[UserView]]


OPERATIONS: Mapping[str, Operation[Any]] = {
    "lock_user": Operation(UserIdArgs, _lock_user),
    "unlock_user": Operation(UserIdArgs, _unlock_user),
    "set_user_roles": Operation(SetUserRolesArgs, _set_user_roles),
}


def to_response(result: Result[UserView]) -> MutationResponse:
    match result:
        case Success(payload=payload):
            return MutationResponse(payload=payload.model_dump(mode="json"), error=None)
        case Failure(kind=kind):
            return MutationResponse(payload=None, error=kind.value)
        case _:
            assert_never(result)


class MutationDispatcher:
    def __init__(
        self,
        service: AccountService,
        operations: Mapping[str, Operation[Any]] = OPERATIONS,
    ) -> None:
        self.service = service
        self.operations = operations

    def dispatch(
        self, actor: Actor | None, operation: str, arguments: Mapping[str, Any]
    ) -> MutationResponse:
        op = self.operations.get(operation)
        if op is None:
            raise UnknownOperationError(operation)

        try:
            args = op.args_model.model_validate(dict(arguments))
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            raise InvalidArgumentsError(operation, list(errors)) from e

        return to_response(op.handler(self.service, actor, args))

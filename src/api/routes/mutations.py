from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from src.api.deps import get_current_actor, get_dispatcher
from src.api.dispatch import InvalidArgumentsError, MutationDispatcher, UnknownOperationError
from src.api.schemas import MutationResponse
from src.domain.entities import Actor

router = APIRouter()


def dispatch_or_raise(
    dispatcher: MutationDispatcher,
    actor: Actor | None,
    operation: str,
    arguments: dict[str, Any],
) -> MutationResponse:
    """Dispatch and turn boundary errors (unknown op, bad arguments) into HTTP errors."""
    try:
        return dispatcher.dispatch(actor, operation, arguments)
    except UnknownOperationError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidArgumentsError as e:
        raise HTTPException(status_code=422, detail=e.errors) from e


@router.post("/{operation}", response_model=MutationResponse)
def run_mutation(
    operation: str,
    arguments: dict[str, Any] | None = Body(default=None),
    actor: Actor | None = Depends(get_current_actor),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> MutationResponse:
    """Run a named account mutation. Envelope failures still return 200."""
    return dispatch_or_raise(dispatcher, actor, operation, arguments or {})

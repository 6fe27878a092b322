from fastapi import APIRouter, Depends, Path

from src.api.deps import get_current_actor, get_dispatcher
from src.api.dispatch import MutationDispatcher
from src.api.routes.mutations import dispatch_or_raise
from src.api.schemas import MutationResponse, RolesUpdateRequest
from src.domain.entities import Actor

router = APIRouter()


@router.post("/{user_id}/lock", response_model=MutationResponse)
def lock_user(
    user_id: int = Path(gt=0),
    actor: Actor | None = Depends(get_current_actor),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> MutationResponse:
    """Lock a user account."""
    return dispatch_or_raise(dispatcher, actor, "lock_user", {"user_id": user_id})


@router.post("/{user_id}/unlock", response_model=MutationResponse)
def unlock_user(
    user_id: int = Path(gt=0),
    actor: Actor | None = Depends(get_current_actor),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> MutationResponse:
    """Unlock a user account."""
    return dispatch_or_raise(dispatcher, actor, "unlock_user", {"user_id": user_id})


@router.put("/{user_id}/roles", response_model=MutationResponse)
def set_user_roles(
    req: RolesUpdateRequest,
    user_id: int = Path(gt=0),
    actor: Actor | None = Depends(get_current_actor),
    dispatcher: MutationDispatcher = Depends(get_dispatcher),
) -> MutationResponse:
    """Replace a user's roles."""
    return dispatch_or_raise(
        dispatcher, actor, "set_user_roles", {"user_id": user_id, "roles": req.roles}
    )

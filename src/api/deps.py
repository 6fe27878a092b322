from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError

from src.api.auth_utils import decode_access_token
from src.api.dispatch import MutationDispatcher
from src.app_shell.config import Settings
from src.app_shell.context import ServiceContext
from src.domain.entities import Actor
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Composition root ---
# Built once per process; the repository adapter is chosen here from settings.
@lru_cache
def get_context() -> ServiceContext:
    return ServiceContext.create(get_settings(), get_rules())


def get_dispatcher(ctx: ServiceContext = Depends(get_context)) -> MutationDispatcher:
    return MutationDispatcher(ctx.account_service)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_current_actor(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Actor | None:
    """Resolve the actor from the bearer token. No token means anonymous."""
    if not token:
        return None

    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    actor_id = payload.get("sub")
    if actor_id is None or not isinstance(actor_id, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    try:
        return Actor(id=actor_id, roles=tuple(payload.get("roles") or ()))
    except (ValidationError, TypeError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        ) from e

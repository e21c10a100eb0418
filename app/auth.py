import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from app.middleware import user_id_var

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller. Passed explicitly into every service call."""
    user_id: str


async def get_principal(request: Request) -> Principal | None:
    """Read the caller identity forwarded by the upstream auth gateway.

    Returns None when the header is missing or blank; the service decides
    what an anonymous call means.
    """
    header = request.app.state.settings.AUTH_USER_HEADER
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        return None
    user_id_var.set(user_id)
    return Principal(user_id=user_id)


async def require_principal(principal: Principal | None = Depends(get_principal)) -> Principal:
    # Runs as a dependency, so a missing identity wins over body validation errors
    if principal is None:
        logger.warning("Rejected unauthenticated request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must be signed in to perform this action.",
        )
    return principal

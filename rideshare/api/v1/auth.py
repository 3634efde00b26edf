"""Login route and the authorization gate dependencies (require_login, require_admin)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rideshare.core.config import Settings, get_settings
from rideshare.core.database import get_db
from rideshare.core.security import TokenService
from rideshare.schemas.auth import IdentityClaim, LoginRequest, LoginResponse
from rideshare.services.accounts import AccountDirectory
from rideshare.services.auth import Denied, Predicate, always, authorize, is_admin, login

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    return TokenService(settings)


def get_accounts(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AccountDirectory:
    return AccountDirectory(db, settings)


def guard(
    predicate: Predicate, message: str | None = None
) -> Callable[..., IdentityClaim]:
    """
    Build a dependency that admits a request only with a valid bearer token whose
    identity satisfies `predicate`. The identity is stored on request.state and
    returned to the route.
    """

    def dependency(
        request: Request,
        credentials: Annotated[
            HTTPAuthorizationCredentials | None, Depends(security)
        ],
        tokens: Annotated[TokenService, Depends(get_token_service)],
        accounts: Annotated[AccountDirectory, Depends(get_accounts)],
    ) -> IdentityClaim:
        token = credentials.credentials if credentials is not None else None
        decision = authorize(token, tokens, accounts.exists, predicate, message)
        if isinstance(decision, Denied):
            headers = (
                {"WWW-Authenticate": "Bearer"}
                if decision.status_code == status.HTTP_401_UNAUTHORIZED
                else None
            )
            raise HTTPException(
                status_code=decision.status_code,
                detail=decision.message,
                headers=headers,
            )
        request.state.identity = decision.identity
        return decision.identity

    return dependency


require_login = guard(always)
require_admin = guard(is_admin, "needs admin permissions")


@router.post("/login", response_model=LoginResponse)
def post_login(
    body: LoginRequest,
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return login(accounts, tokens, body.username, body.password)

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from app.core.auth import get_current_user
from app.schemas.auth import AuthActionResponse, AuthenticatedUser, AuthUserResponse

router = APIRouter(prefix="/api", tags=["Auth"])


@router.get("/auth/user", response_model=AuthUserResponse)
@router.get("/auth", response_model=AuthUserResponse)
async def current_user(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthUserResponse:
    """Return the user resolved for this request.

    Raises:
        AuthenticationAppError: 401 when the request is anonymous.
    """
    return AuthUserResponse(authenticated=True, user=user)


@router.post("/auth", response_model=AuthActionResponse)
async def sign_in() -> AuthActionResponse:
    # Placeholder until a real identity provider is wired in
    return AuthActionResponse(success=True, message="Authentication successful")


@router.get("/login", include_in_schema=False)
async def login() -> RedirectResponse:
    return RedirectResponse(url="/dashboard")


@router.get("/logout", include_in_schema=False)
async def logout() -> RedirectResponse:
    return RedirectResponse(url="/")

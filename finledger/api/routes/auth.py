"""Auth Routes: signup and login, both returning a bearer token and the user.

Invariants:
    - signup -> 201 or 409 EMAIL_TAKEN
    - login -> 200 or 401 INVALID_CREDENTIALS
"""

from fastapi import APIRouter, Depends, status

from finledger.api.dependencies import get_auth_service
from finledger.schemas.user import AuthResponse, LoginRequest, UserCreate, UserResponse
from finledger.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def sign_up(
    body: UserCreate, auth: AuthService = Depends(get_auth_service),
):
    """Register a new account and log it in."""
    token, user = await auth.sign_up(body)
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    token, user = await auth.login(body)
    return AuthResponse(access_token=token, user=UserResponse.model_validate(user))

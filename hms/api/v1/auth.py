from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import TokenPayload
from ...api.deps import get_current_user, get_current_user_token, rate_limit_check
from ...services.auth_service import AuthService
from ...schemas.auth import Credentials, LoginData, TokenValidation, UserResponse
from ...schemas.common import ApiResponse, envelope
from ...models.user import LoginCredential

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/login", response_model=ApiResponse[LoginData])
async def login(
    credentials: Credentials,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate user and return an access token."""
    user, token = AuthService(db).login(credentials.username, credentials.password)

    return envelope(
        LoginData(
            token=token.access_token,
            token_type=token.token_type,
            username=user.user_id,
            role=user.role,
            expires_in=token.expires_in
        ),
        "Login successful"
    )

@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register(
    credentials: Credentials,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Register a new user; the role follows the user id prefix."""
    user = AuthService(db).register_user(credentials.username, credentials.password)
    return envelope(UserResponse.model_validate(user), "User registered successfully")

@router.post("/validate", response_model=ApiResponse[TokenValidation])
async def validate_token(
    token_payload: TokenPayload = Depends(get_current_user_token)
):
    """Verify if token is valid."""
    return envelope(
        TokenValidation(valid=True, username=token_payload.sub, role=token_payload.role),
        "Token is valid"
    )

@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    current_user: LoginCredential = Depends(get_current_user)
):
    """Get current user information."""
    return envelope(UserResponse.model_validate(current_user))

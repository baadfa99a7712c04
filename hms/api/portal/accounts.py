from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import rate_limit_check
from ...services.auth_service import AuthService
from ...schemas.auth import Credentials
from ...schemas.common import ActionResult

router = APIRouter(tags=["Portal: Accounts"])

@router.post("/login")
async def login(
    credentials: Credentials,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Check credentials; the portal routes the user by the returned role."""
    user = AuthService(db).authenticate_user(credentials.username, credentials.password)
    if not user:
        return {"success": False, "message": "Invalid credentials"}

    return [{"userID": user.user_id, "role": user.role.value}]

@router.post("/signup", response_model=ActionResult)
async def signup(
    credentials: Credentials,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    try:
        AuthService(db).register_user(credentials.username, credentials.password)
    except HTTPException as exc:
        return ActionResult(success=False, message=exc.detail)

    return ActionResult(success=True, message="User registered successfully")

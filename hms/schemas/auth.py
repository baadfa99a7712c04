from pydantic import BaseModel, Field

from .common import CamelModel
from ..core.security import UserRole

class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)

class LoginData(CamelModel):
    token: str
    token_type: str = "bearer"
    username: str
    role: UserRole
    expires_in: int

class UserResponse(CamelModel):
    user_id: str
    role: UserRole

class TokenValidation(CamelModel):
    valid: bool
    username: str
    role: UserRole

from sqlalchemy.orm import Session
from typing import Optional, Tuple
import logging

from ..models.user import LoginCredential
from ..core.exceptions import ConflictError, ValidationFailedError
from ..core.security import (
    verify_password, get_password_hash, create_user_token,
    role_for_user_id, AuthenticationError, Token
)

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register_user(self, user_id: str, password: str) -> LoginCredential:
        """Register a new login credential; the role follows the user id prefix."""
        role = role_for_user_id(user_id)
        if role is None:
            raise ValidationFailedError(
                "User ID must start with 'a' (admin), 'p' (patient) or 'd'/'r' (doctor)"
            )

        # Check if user already exists
        existing_user = self.db.query(LoginCredential).filter(
            LoginCredential.user_id == user_id
        ).first()

        if existing_user:
            raise ConflictError("This user already exists")

        new_user = LoginCredential(
            user_id=user_id,
            password_hash=get_password_hash(password),
            role=role
        )

        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)

        logger.info(f"Registered {role.value} user {user_id}")
        return new_user

    def authenticate_user(self, user_id: str, password: str) -> Optional[LoginCredential]:
        """Return the credential when the password matches, None otherwise."""
        user = self.get_user(user_id)

        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for user {user_id}")
            return None

        return user

    def login(self, user_id: str, password: str) -> Tuple[LoginCredential, Token]:
        """Authenticate and issue an access token."""
        user = self.authenticate_user(user_id, password)
        if not user:
            raise AuthenticationError("Invalid username or password")

        return user, create_user_token(user.user_id, user.role)

    def get_user(self, user_id: str) -> Optional[LoginCredential]:
        return self.db.query(LoginCredential).filter(
            LoginCredential.user_id == user_id
        ).first()

    def ensure_user(self, user_id: str, password: str) -> LoginCredential:
        """Create the credential unless it already exists."""
        return self.get_user(user_id) or self.register_user(user_id, password)

from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from ..core.database import Base
from ..core.security import UserRole

class LoginCredential(Base):
    __tablename__ = "login_credentials"

    user_id = Column(String(50), primary_key=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<LoginCredential(user_id='{self.user_id}', role='{self.role}')>"

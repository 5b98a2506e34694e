from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func
from app.database.connection import Base

ACCOUNT_ROLES = ("admin", "user")
ACCOUNT_STATUSES = ("active", "blocked")


class Account(Base):
    __tablename__ = "users"
    
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # Stored lower-cased
    phone = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user", index=True)
    status = Column(String, nullable=False, default="active", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_user_role_status', 'role', 'status'),
    )

"""Database models for the auth module."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String, Text

from consulta_prod.core.database import Base, new_id


class User(Base):
    """Application account. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column("password", Text, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="operator")  # admin, operator
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

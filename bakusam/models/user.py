from sqlalchemy import Column, String, Boolean, Enum
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class UserRole(PyEnum):
    ADMIN = "admin"
    REGIONAL = "regional"
    STAFF = "staff"

class User(BaseModel):
    __tablename__ = 'users'

    username = Column(String(64), nullable=False, unique=True, index=True)
    full_name = Column(String(128), nullable=False)
    email = Column(String(128), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.STAFF)
    is_active = Column(Boolean, nullable=False, default=True)

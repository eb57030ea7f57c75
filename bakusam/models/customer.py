from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Enum
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class CustomerStatus(PyEnum):
    ACTIVE = "active"
    BLOCKED = "blocked"

class Customer(BaseModel):
    __tablename__ = 'customers'

    full_name = Column(String(128), nullable=False, index=True)
    phone = Column(String(32), nullable=False, unique=True)
    email = Column(String(128), nullable=False, unique=True)
    address = Column(String(255), nullable=True)
    status = Column(Enum(CustomerStatus), nullable=False, default=CustomerStatus.ACTIVE, index=True)
    total_orders = Column(Integer, nullable=False, default=0)
    join_date = Column(DateTime, nullable=False, default=datetime.utcnow)

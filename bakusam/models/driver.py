from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, Enum
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class DriverStatus(PyEnum):
    ACTIVE = "active"
    BUSY = "busy"
    OFFLINE = "offline"
    SUSPENDED = "suspended"
    PENDING = "pending"

class Driver(BaseModel):
    __tablename__ = 'drivers'

    full_name = Column(String(128), nullable=False, index=True)
    phone = Column(String(32), nullable=False, unique=True)
    email = Column(String(128), nullable=False, unique=True)
    nik = Column(String(32), nullable=False, unique=True)
    address = Column(String(255), nullable=False)
    sim_number = Column(String(64), nullable=False)
    vehicle_type = Column(String(32), nullable=False)
    status = Column(Enum(DriverStatus), nullable=False, default=DriverStatus.ACTIVE, index=True)
    rating = Column(Float, nullable=False, default=0.0)
    total_orders = Column(Integer, nullable=False, default=0)
    join_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    commission = Column(Integer, nullable=False, default=70)
    balance = Column(Integer, nullable=False, default=0)

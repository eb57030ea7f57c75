from sqlalchemy import Column, String, Integer, ForeignKey, Enum
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class VehicleStatus(PyEnum):
    VERIFIED = "verified"
    PENDING = "pending"
    REJECTED = "rejected"

class Vehicle(BaseModel):
    __tablename__ = 'vehicles'

    driver_id = Column(Integer, ForeignKey('drivers.id'), nullable=False, index=True)
    vehicle_type = Column(String(32), nullable=False)
    brand = Column(String(64), nullable=False)
    model = Column(String(64), nullable=False)
    year = Column(Integer, nullable=False)
    plate_number = Column(String(32), nullable=False, unique=True)
    stnk_number = Column(String(64), nullable=False)
    status = Column(Enum(VehicleStatus), nullable=False, default=VehicleStatus.VERIFIED, index=True)

from datetime import datetime
from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Enum, Text
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class OrderStatus(PyEnum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    PICKUP = "pickup"
    DELIVERY = "delivery"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class Order(BaseModel):
    __tablename__ = 'orders'

    customer_id = Column(Integer, ForeignKey('customers.id'), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey('drivers.id'), nullable=True, index=True)
    pickup_address = Column(String(255), nullable=False)
    delivery_address = Column(String(255), nullable=False)
    pickup_latitude = Column(Float, nullable=True)
    pickup_longitude = Column(Float, nullable=True)
    delivery_latitude = Column(Float, nullable=True)
    delivery_longitude = Column(Float, nullable=True)
    distance = Column(Float, nullable=False, default=0.0)
    vehicle_type = Column(String(32), nullable=True)
    base_fare = Column(Float, nullable=False, default=0.0)
    total_fare = Column(Float, nullable=False, default=0.0)
    status = Column(Enum(OrderStatus), nullable=False, default=OrderStatus.PENDING, index=True)
    order_date = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    completed_date = Column(DateTime, nullable=True)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

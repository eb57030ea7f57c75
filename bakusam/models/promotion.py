from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime, Enum, Text
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class DiscountType(PyEnum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"

class Promotion(BaseModel):
    __tablename__ = 'promotions'

    title = Column(String(128), nullable=False)
    description = Column(Text, nullable=False)
    discount_type = Column(Enum(DiscountType), nullable=False)
    discount_value = Column(Float, nullable=False)
    min_order_value = Column(Float, nullable=True)
    max_discount = Column(Float, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    usage_limit = Column(Integer, nullable=True)
    usage_count = Column(Integer, nullable=False, default=0)

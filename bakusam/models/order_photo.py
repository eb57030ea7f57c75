from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from bakusam.models.base_model import BaseModel

class OrderPhoto(BaseModel):
    __tablename__ = 'order_photos'

    order_id = Column(Integer, ForeignKey('orders.id'), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    uploaded_at = Column(DateTime, nullable=False, default=datetime.utcnow)

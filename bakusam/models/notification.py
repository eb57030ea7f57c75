from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Text
from enum import Enum as PyEnum
from bakusam.models.base_model import BaseModel

class NotificationType(PyEnum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"

class NotificationTarget(PyEnum):
    ALL = "all"
    DRIVERS = "drivers"
    CUSTOMERS = "customers"

class Notification(BaseModel):
    __tablename__ = 'notifications'

    title = Column(String(128), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(Enum(NotificationType), nullable=False, default=NotificationType.INFO)
    target_type = Column(Enum(NotificationTarget), nullable=False, default=NotificationTarget.ALL)
    is_read = Column(Boolean, nullable=False, default=False)
    created_date = Column(DateTime, nullable=False, default=datetime.utcnow)

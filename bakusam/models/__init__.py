# Importing every model registers its table on Base.metadata
from bakusam.models.base_model import Base, BaseModel
from bakusam.models.user import User, UserRole
from bakusam.models.driver import Driver, DriverStatus
from bakusam.models.vehicle import Vehicle, VehicleStatus
from bakusam.models.customer import Customer, CustomerStatus
from bakusam.models.order import Order, OrderStatus
from bakusam.models.notification import Notification, NotificationType, NotificationTarget
from bakusam.models.pricing_rule import PricingRule
from bakusam.models.promotion import Promotion, DiscountType
from bakusam.models.order_photo import OrderPhoto

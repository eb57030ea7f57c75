from sqlalchemy import Column, String, Float, Boolean
from bakusam.models.base_model import BaseModel

class PricingRule(BaseModel):
    __tablename__ = 'pricing_rules'

    vehicle_type = Column(String(32), nullable=False, index=True)
    base_fare = Column(Float, nullable=False)
    per_km_rate = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    def fare_for(self, distance_km: float) -> float:
        return round(self.base_fare + self.per_km_rate * distance_km, 2)

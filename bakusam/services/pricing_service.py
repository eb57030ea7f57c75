from sqlalchemy import select
from bakusam.models.pricing_rule import PricingRule
from bakusam.models.promotion import Promotion
from bakusam.services.resource_service import ResourceService
import logging

logger = logging.getLogger(__name__)

class PricingRuleService(ResourceService):
    model = PricingRule
    name = "pricing rule"
    fields = {
        "vehicleType": "vehicle_type",
        "baseFare": "base_fare",
        "perKmRate": "per_km_rate",
        "isActive": "is_active",
    }
    required_fields = ["vehicleType", "baseFare", "perKmRate"]

    @staticmethod
    async def find_active_rule(session, vehicle_type: str):
        result = await session.execute(
            select(PricingRule)
            .where(PricingRule.vehicle_type == vehicle_type)
            .where(PricingRule.is_active.is_(True))
            .order_by(PricingRule.id.desc())
        )
        return result.scalars().first()


class PromotionService(ResourceService):
    model = Promotion
    name = "promotion"
    fields = {
        "title": "title",
        "description": "description",
        "discountType": "discount_type",
        "discountValue": "discount_value",
        "minOrderValue": "min_order_value",
        "maxDiscount": "max_discount",
        "startDate": "start_date",
        "endDate": "end_date",
        "isActive": "is_active",
        "usageLimit": "usage_limit",
        "usageCount": "usage_count",
    }
    required_fields = ["title", "description", "discountType", "discountValue", "startDate", "endDate"]
    read_only_fields = {"usageCount"}

    async def before_create(self, session, values: dict):
        if values["end_date"] < values["start_date"]:
            logger.warning(f"Promotion rejected, ends before it starts: {values['title']}")
            return {"error": "endDate must not be before startDate", "status": 400}
        return None

    async def before_update(self, session, obj: Promotion, values: dict):
        start_date = values.get("start_date", obj.start_date)
        end_date = values.get("end_date", obj.end_date)
        if start_date is not None and end_date is not None and end_date < start_date:
            logger.warning(f"Promotion {obj.id} update rejected, ends before it starts")
            return {"error": "endDate must not be before startDate", "status": 400}
        return None

from sqlalchemy import select
from bakusam.models.driver import Driver
from bakusam.models.vehicle import Vehicle
from bakusam.services.resource_service import ResourceService
import logging

logger = logging.getLogger(__name__)

class VehicleService(ResourceService):
    model = Vehicle
    name = "vehicle"
    fields = {
        "driverId": "driver_id",
        "vehicleType": "vehicle_type",
        "brand": "brand",
        "model": "model",
        "year": "year",
        "plateNumber": "plate_number",
        "stnkNumber": "stnk_number",
        "status": "status",
    }
    required_fields = ["driverId", "vehicleType", "brand", "model", "year", "plateNumber", "stnkNumber"]

    async def before_create(self, session, values: dict):
        driver = await session.get(Driver, values["driver_id"])
        if not driver:
            logger.warning(f"Vehicle creation for non-existent driver: {values['driver_id']}")
            return {"error": "Driver not found", "status": 400}
        return None

    async def enrich(self, session, items: list) -> list:
        driver_ids = {item["driverId"] for item in items}
        if not driver_ids:
            return items
        result = await session.execute(select(Driver).where(Driver.id.in_(driver_ids)))
        drivers = {d.id: {"id": d.id, "fullName": d.full_name} for d in result.scalars().all()}
        for item in items:
            item["driver"] = drivers.get(item["driverId"])
        return items

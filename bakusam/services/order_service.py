from datetime import datetime
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from bakusam.core import order_status
from bakusam.core.geo import haversine, has_coordinates
from bakusam.models.customer import Customer
from bakusam.models.driver import Driver, DriverStatus
from bakusam.models.order import Order, OrderStatus
from bakusam.services.pricing_service import PricingRuleService
from bakusam.services.resource_service import ResourceService, MissingFieldsError
import logging

logger = logging.getLogger(__name__)

class OrderService(ResourceService):
    """Orders plus the server side of the status state machine.

    A status change must be the next legal step of the order lifecycle.
    Assignment is a conditional update on ``status = pending`` so two
    operators assigning the same order cannot both succeed. The assigned
    driver is marked busy and released again when the order reaches a
    terminal state.
    """

    model = Order
    name = "order"
    fields = {
        "customerId": "customer_id",
        "driverId": "driver_id",
        "pickupAddress": "pickup_address",
        "deliveryAddress": "delivery_address",
        "pickupLat": "pickup_latitude",
        "pickupLng": "pickup_longitude",
        "deliveryLat": "delivery_latitude",
        "deliveryLng": "delivery_longitude",
        "distance": "distance",
        "vehicleType": "vehicle_type",
        "baseFare": "base_fare",
        "totalFare": "total_fare",
        "status": "status",
        "orderDate": "order_date",
        "completedDate": "completed_date",
        "rating": "rating",
        "notes": "notes",
    }
    required_fields = ["customerId", "pickupAddress", "deliveryAddress"]
    read_only_fields = {"orderDate"}

    def coerce(self, data: dict, partial: bool = True) -> dict:
        values = super().coerce(data, partial)
        rating = values.get("rating")
        if rating is not None and not 1 <= rating <= 5:
            raise ValueError("rating must be between 1 and 5")
        if values.get("distance") is not None and values["distance"] < 0:
            raise ValueError("distance must not be negative")
        return values

    async def enrich(self, session, items: list) -> list:
        customer_ids = {item["customerId"] for item in items}
        driver_ids = {item["driverId"] for item in items if item["driverId"] is not None}

        customers = {}
        if customer_ids:
            result = await session.execute(select(Customer).where(Customer.id.in_(customer_ids)))
            customers = {
                c.id: {"id": c.id, "fullName": c.full_name, "phone": c.phone}
                for c in result.scalars().all()
            }
        drivers = {}
        if driver_ids:
            result = await session.execute(select(Driver).where(Driver.id.in_(driver_ids)))
            drivers = {
                d.id: {"id": d.id, "fullName": d.full_name, "phone": d.phone}
                for d in result.scalars().all()
            }

        for item in items:
            item["customer"] = customers.get(item["customerId"])
            item["driver"] = drivers.get(item["driverId"])
        return items

    async def before_create(self, session, values: dict):
        customer = await session.get(Customer, values["customer_id"])
        if not customer:
            logger.warning(f"Order creation for non-existent customer: {values['customer_id']}")
            return {"error": "Customer not found", "status": 400}

        # New orders always start unassigned
        if values.get("driver_id") is not None or values.get("status") not in (None, OrderStatus.PENDING):
            logger.info("Ignoring driver/status on order creation, orders start as pending")
        values["driver_id"] = None
        values["status"] = OrderStatus.PENDING
        values.pop("completed_date", None)

        if values.get("distance") is None:
            coordinates = (
                values.get("pickup_latitude"), values.get("pickup_longitude"),
                values.get("delivery_latitude"), values.get("delivery_longitude"),
            )
            if not has_coordinates(*coordinates):
                return {"error": "distance is required when coordinates are missing", "status": 400}
            values["distance"] = round(haversine(*coordinates), 2)

        if values.get("total_fare") is None:
            rule = None
            if values.get("vehicle_type"):
                rule = await PricingRuleService.find_active_rule(session, values["vehicle_type"])
            if rule:
                values.setdefault("base_fare", rule.base_fare)
                values["total_fare"] = rule.fare_for(values["distance"])
            elif values.get("base_fare") is not None:
                values["total_fare"] = values["base_fare"]
            else:
                logger.warning(f"No fare given and no active pricing rule for {values.get('vehicle_type')}")
                return {"error": "No active pricing rule for vehicle type", "status": 400}
        values.setdefault("base_fare", values["total_fare"])
        return None

    async def update_item(self, item_id: int, data: dict, partial: bool = True) -> dict:
        try:
            values = self.coerce(data, partial=partial)
        except MissingFieldsError as e:
            logger.warning(f"Invalid update order request: missing {e.fields}")
            return {"error": "Missing required fields", "fields": e.fields, "status": 400}
        except ValueError as e:
            logger.warning(f"Invalid update order request: {str(e)}")
            return {"error": str(e), "status": 400}

        async with self.session_factory() as session:
            try:
                order = await session.get(Order, item_id)
                if not order:
                    logger.warning(f"Update attempt for non-existent order: {item_id}")
                    return {"error": "Order not found", "status": 404}

                target = values.pop("status", None)
                driver_id = values.pop("driver_id", order.driver_id)
                if target == order.status:
                    target = None

                if target is None and driver_id != order.driver_id:
                    logger.warning(f"Driver change without assignment on order {item_id}")
                    return {"error": "Driver can only be set by assigning a pending order", "status": 409}

                if target is not None:
                    if not order_status.is_legal_transition(order.status.value, target.value):
                        logger.warning(f"Illegal status transition for order {item_id}: {order.status.value} -> {target.value}")
                        return {
                            "error": f"Illegal status transition from {order.status.value} to {target.value}",
                            "status": 409
                        }
                    if target == OrderStatus.ASSIGNED:
                        error = await self._assign(session, order, driver_id)
                        if error:
                            await session.rollback()
                            return error
                    else:
                        await self._advance(session, order, target, values)

                for attr, value in values.items():
                    setattr(order, attr, value)
                await session.commit()
                await session.refresh(order)
                logger.info(f"Order {item_id} updated, status {order.status.value}")
                item = (await self.enrich(session, [self.serialize(order)]))[0]
                return {"item": item, "status": 200}
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"Order update conflict for {item_id}: {str(e.orig)}")
                return {"error": "Order conflicts with an existing record", "status": 409}
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to update order {item_id}: {str(e)}", exc_info=True)
                return {"error": "Failed to update order", "status": 500}

    async def _assign(self, session, order: Order, driver_id):
        if driver_id is None:
            return {"error": "driverId is required to assign an order", "status": 400}

        driver = await session.get(Driver, driver_id)
        if not driver:
            logger.warning(f"Assignment of order {order.id} to non-existent driver {driver_id}")
            return {"error": "Driver not found", "status": 404}
        if driver.status != DriverStatus.ACTIVE:
            logger.warning(f"Assignment of order {order.id} to unavailable driver {driver_id} ({driver.status.value})")
            return {"error": "Driver is not available", "status": 409}

        result = await session.execute(
            update(Order)
            .where(Order.id == order.id)
            .where(Order.status == OrderStatus.PENDING)
            .values(driver_id=driver_id, status=OrderStatus.ASSIGNED, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(f"Order {order.id} was assigned concurrently")
            return {"error": "Order has already been assigned", "status": 409}

        # The driver is claimed the same way, so one driver never holds two live orders
        result = await session.execute(
            update(Driver)
            .where(Driver.id == driver_id)
            .where(Driver.status == DriverStatus.ACTIVE)
            .values(status=DriverStatus.BUSY, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(f"Driver {driver_id} was taken concurrently, order {order.id} left pending")
            return {"error": "Driver is not available", "status": 409}

        await session.refresh(driver)
        await session.refresh(order)
        logger.info(f"Order {order.id} assigned to driver {driver_id}")
        return None

    async def _advance(self, session, order: Order, target: OrderStatus, values: dict):
        previous = order.status
        order.status = target
        if target not in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
            return

        if target == OrderStatus.COMPLETED and values.get("completed_date") is None:
            values["completed_date"] = datetime.utcnow()

        if order.driver_id is None:
            return
        driver = await session.get(Driver, order.driver_id)
        if not driver:
            return
        if driver.status == DriverStatus.BUSY:
            driver.status = DriverStatus.ACTIVE
        if target == OrderStatus.COMPLETED:
            driver.total_orders = (driver.total_orders or 0) + 1
        logger.info(f"Driver {driver.id} released from order {order.id} ({previous.value} -> {target.value})")

    async def get_current_order_for_driver(self, driver_id: int) -> dict:
        async with self.session_factory() as session:
            try:
                driver = await session.get(Driver, driver_id)
                if not driver:
                    return {"error": "Driver not found", "status": 404}
                result = await session.execute(
                    select(Order)
                    .where(Order.driver_id == driver_id)
                    .where(Order.status.in_([
                        OrderStatus.ASSIGNED, OrderStatus.PICKUP, OrderStatus.DELIVERY
                    ]))
                    .order_by(Order.order_date.desc(), Order.id.desc())
                )
                order = result.scalars().first()
                if not order:
                    logger.info(f"No active order for driver {driver_id}")
                    return {"error": "No active order", "status": 404}
                item = (await self.enrich(session, [self.serialize(order)]))[0]
                return {"item": item, "status": 200}
            except Exception as e:
                logger.error(f"Failed to fetch current order for driver {driver_id}: {str(e)}", exc_info=True)
                return {"error": "Failed to fetch current order", "status": 500}

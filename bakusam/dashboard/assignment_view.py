import random
from bakusam.core import order_status
from bakusam.core.geo import haversine, has_coordinates
from bakusam.dashboard.api_client import ApiClient, ApiError
from bakusam.dashboard.poller import Poller
from bakusam.dashboard.query_cache import QueryCache
from bakusam.dashboard.toast import Toaster
import logging

logger = logging.getLogger(__name__)

PENDING_ORDERS_KEY = ("orders", "pending")
AVAILABLE_DRIVERS_KEY = ("drivers", "available")

MIN_SYNTHETIC_DISTANCE = 1
MAX_SYNTHETIC_DISTANCE = 15

def driver_distance(driver: dict, order: dict = None, rng=random) -> float:
    """Kilometres from the driver's last known position to the order pickup.

    When either side has no coordinates, a distance the driver already
    carries is kept; otherwise a random whole number of kilometres is used.
    """
    if order is not None:
        coordinates = (
            driver.get("latitude"), driver.get("longitude"),
            order.get("pickupLat"), order.get("pickupLng"),
        )
        if has_coordinates(*coordinates):
            return round(haversine(*coordinates), 2)
    if driver.get("distance") is not None:
        return driver["distance"]
    return rng.randint(MIN_SYNTHETIC_DISTANCE, MAX_SYNTHETIC_DISTANCE)

def rank_drivers(drivers: list, order: dict = None, rng=random) -> list:
    """Active drivers annotated with ``distance`` and sorted nearest first."""
    ranked = [
        dict(driver, distance=driver_distance(driver, order, rng))
        for driver in drivers
        if driver.get("status") == "active"
    ]
    ranked.sort(key=lambda driver: driver["distance"])
    return ranked

class AssignmentView:
    """Pending orders next to available drivers, with auto and manual assignment."""

    def __init__(self, api: ApiClient, cache: QueryCache, toaster: Toaster, rng=None,
                 pending_interval: float = 5, drivers_interval: float = 10):
        self.api = api
        self.cache = cache
        self.toaster = toaster
        self.rng = rng or random.Random()
        self.selected_order = None
        self.selected_driver = None
        self.pollers = [
            Poller("pending orders", pending_interval, self.refresh_pending_orders),
            Poller("available drivers", drivers_interval, self.refresh_available_drivers),
        ]

    # -- data --------------------------------------------------------------

    async def _fetch_pending_orders(self) -> list:
        orders = await self.api.get("/api/orders")
        return [order for order in orders if order.get("status") == order_status.PENDING]

    async def _fetch_available_drivers(self) -> list:
        drivers = await self.api.get("/api/drivers")
        return rank_drivers(drivers, self.selected_order, self.rng)

    async def pending_orders(self) -> list:
        return await self.cache.fetch(PENDING_ORDERS_KEY, self._fetch_pending_orders)

    async def available_drivers(self) -> list:
        return await self.cache.fetch(AVAILABLE_DRIVERS_KEY, self._fetch_available_drivers)

    async def refresh_pending_orders(self) -> list:
        return await self.cache.refresh(PENDING_ORDERS_KEY, self._fetch_pending_orders)

    async def refresh_available_drivers(self) -> list:
        return await self.cache.refresh(AVAILABLE_DRIVERS_KEY, self._fetch_available_drivers)

    def start_polling(self):
        for poller in self.pollers:
            poller.start()

    async def stop_polling(self):
        for poller in self.pollers:
            await poller.stop()

    # -- selection ---------------------------------------------------------

    def select_order(self, order: dict = None):
        self.selected_order = order

    def select_driver(self, driver: dict = None):
        self.selected_driver = driver

    @property
    def can_manual_assign(self) -> bool:
        return self.selected_order is not None and self.selected_driver is not None

    # -- assignment --------------------------------------------------------

    async def _assign(self, order_id: int, driver_id: int):
        await self.api.patch(f"/api/orders/{order_id}", {
            "driverId": driver_id,
            "status": order_status.ASSIGNED
        })
        self.cache.invalidate(("orders",))
        self.cache.invalidate(("drivers",))

    async def auto_assign(self, order: dict) -> bool:
        """Assign ``order`` to the nearest available driver."""
        drivers = await self.drivers_for(order)
        if not drivers:
            logger.warning(f"Auto assignment of order {order['id']}: no driver available")
            self.toaster.error("Tidak ada driver tersedia")
            return False

        best_driver = drivers[0]
        try:
            await self._assign(order["id"], best_driver["id"])
        except ApiError as e:
            logger.warning(f"Auto assignment of order {order['id']} failed: {e.message}")
            self.toaster.error("Gagal menugaskan order secara otomatis")
            return False

        logger.info(f"Order {order['id']} auto-assigned to driver {best_driver['id']} ({best_driver['distance']} km)")
        self.toaster.success("Order berhasil ditugaskan secara otomatis")
        return True

    async def drivers_for(self, order: dict) -> list:
        """Available drivers re-sorted by distance to this order's pickup."""
        drivers = await self.available_drivers()
        return rank_drivers(drivers, order, self.rng)

    async def manual_assign(self) -> bool:
        if not self.can_manual_assign:
            logger.debug("Manual assignment needs both an order and a driver selected")
            return False

        order_id = self.selected_order["id"]
        driver_id = self.selected_driver["id"]
        try:
            await self._assign(order_id, driver_id)
        except ApiError as e:
            logger.warning(f"Manual assignment of order {order_id} to driver {driver_id} failed: {e.message}")
            self.toaster.error("Gagal menugaskan driver")
            return False

        logger.info(f"Order {order_id} assigned to driver {driver_id}")
        self.selected_order = None
        self.selected_driver = None
        self.toaster.success("Driver berhasil ditugaskan")
        return True

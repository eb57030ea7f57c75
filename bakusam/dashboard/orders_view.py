from datetime import datetime, timezone
from bakusam.core import order_status
from bakusam.dashboard.api_client import ApiClient, ApiError
from bakusam.dashboard.query_cache import QueryCache
from bakusam.dashboard.toast import Toaster
import logging

logger = logging.getLogger(__name__)

ORDERS_KEY = ("orders",)
STATS_KEY = ("dashboard/stats",)
DRIVERS_KEY = ("drivers",)
ALL = "all"

def _contains(value, term: str) -> bool:
    return value is not None and term in str(value).lower()

def filter_orders(orders: list, search_term: str = "", status_filter: str = ALL) -> list:
    """Orders matching the search text and the status filter.

    The text matches the order id, customer name, driver name or either
    address, ignoring case. The status comparison is exact; ``"all"``
    disables it.
    """
    term = (search_term or "").lower()
    matches = []
    for order in orders:
        customer = order.get("customer") or {}
        driver = order.get("driver") or {}
        matches_search = (
            term in str(order.get("id", ""))
            or _contains(customer.get("fullName"), term)
            or _contains(driver.get("fullName"), term)
            or _contains(order.get("pickupAddress"), term)
            or _contains(order.get("deliveryAddress"), term)
        )
        matches_status = status_filter == ALL or order.get("status") == status_filter
        if matches_search and matches_status:
            matches.append(order)
    return matches

def order_stats(orders: list) -> dict:
    return {
        "total": len(orders),
        "inProgress": sum(1 for o in orders if o.get("status") in order_status.IN_PROGRESS_STATUSES),
        "completed": sum(1 for o in orders if o.get("status") == order_status.COMPLETED),
        "cancelled": sum(1 for o in orders if o.get("status") == order_status.CANCELLED),
    }

class OrdersView:
    def __init__(self, api: ApiClient, cache: QueryCache, toaster: Toaster, clock=None):
        self.api = api
        self.cache = cache
        self.toaster = toaster
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.search_term = ""
        self.status_filter = ALL

    async def load_orders(self) -> list:
        return await self.cache.fetch(ORDERS_KEY, lambda: self.api.get("/api/orders"))

    async def visible_orders(self) -> list:
        return filter_orders(await self.load_orders(), self.search_term, self.status_filter)

    async def stats(self) -> dict:
        return order_stats(await self.load_orders())

    @staticmethod
    def available_transitions(order: dict) -> list:
        return order_status.next_statuses(order.get("status"))

    async def change_status(self, order: dict, status: str, driver_id: int = None) -> bool:
        """PATCH the order to ``status``; moving to ``assigned`` needs ``driver_id``."""
        if status not in self.available_transitions(order):
            logger.warning(f"Status {status} is not offered for order {order.get('id')} ({order.get('status')})")
            self.toaster.error("Gagal memperbarui status order")
            return False
        if status == order_status.ASSIGNED and driver_id is None:
            logger.warning(f"Assigning order {order.get('id')} needs a driver")
            self.toaster.error("Pilih driver untuk menugaskan order")
            return False

        updates = {"status": status}
        if status == order_status.ASSIGNED:
            updates["driverId"] = driver_id
        if status == order_status.COMPLETED:
            updates["completedDate"] = self.clock().isoformat()

        try:
            await self.api.patch(f"/api/orders/{order['id']}", updates)
        except ApiError as e:
            logger.warning(f"Status update of order {order['id']} failed: {e.message}")
            self.toaster.error("Gagal memperbarui status order")
            return False

        self.cache.invalidate(ORDERS_KEY)
        self.cache.invalidate(STATS_KEY)
        if status in (order_status.ASSIGNED, order_status.COMPLETED, order_status.CANCELLED):
            # Driver availability changes with these steps
            self.cache.invalidate(DRIVERS_KEY)
        self.toaster.success("Status order berhasil diperbarui")
        return True

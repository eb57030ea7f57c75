import argparse
import asyncio
import logging
from bakusam.config.settings import DashboardConfig
from bakusam.dashboard.api_client import ApiClient
from bakusam.dashboard.assignment_view import AssignmentView
from bakusam.dashboard.orders_view import OrdersView
from bakusam.dashboard.query_cache import QueryCache
from bakusam.dashboard.session import LoginSession
from bakusam.dashboard.status_badge import format_distance, status_text
from bakusam.dashboard.storage import LocalStorage
from bakusam.dashboard.toast import Toaster
from bakusam.middleware.logger import setup_logger

logger = logging.getLogger(__name__)

class Dashboard:
    """Wires the dashboard flows to one API client, cache and toaster."""

    def __init__(self, config: DashboardConfig, transport=None, rng=None, navigate=None):
        self.config = config
        self.api = ApiClient(config.API_BASE_URL, timeout=config.REQUEST_TIMEOUT, transport=transport)
        self.storage = LocalStorage(config.STORAGE_FILE)
        self.cache = QueryCache()
        self.toaster = Toaster()
        self.session = LoginSession(self.api, self.storage, self.toaster, navigate=navigate)
        self.orders = OrdersView(self.api, self.cache, self.toaster)
        self.assignment = AssignmentView(
            self.api, self.cache, self.toaster, rng=rng,
            pending_interval=config.PENDING_ORDERS_INTERVAL,
            drivers_interval=config.AVAILABLE_DRIVERS_INTERVAL
        )

    def logout(self):
        self.session.logout()
        self.cache.clear()

    async def aclose(self):
        await self.assignment.stop_polling()
        await self.api.aclose()

async def watch_assignments(dashboard: Dashboard, username: str, password: str, auto: bool):
    if not dashboard.session.is_authenticated and not await dashboard.session.login(username, password):
        print(f"❌ {dashboard.toaster.last.description}")
        return 1

    dashboard.assignment.start_polling()
    try:
        while True:
            await asyncio.sleep(dashboard.config.PENDING_ORDERS_INTERVAL)
            orders = dashboard.cache.get(("orders", "pending")) or []
            drivers = dashboard.cache.get(("drivers", "available")) or []
            print(f"📦 {len(orders)} pending order(s), 🚗 {len(drivers)} available driver(s)")
            for driver in drivers[:5]:
                print(f"   {driver['fullName']} - {format_distance(driver['distance'])} - {status_text(driver['status'])}")
            if auto:
                for order in orders:
                    await dashboard.assignment.auto_assign(order)
    finally:
        await dashboard.aclose()

def main(argv=None):
    parser = argparse.ArgumentParser(description="Watch pending orders and available drivers")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--password", default="admin123")
    parser.add_argument("--auto", action="store_true", help="Auto-assign every pending order")
    args = parser.parse_args(argv)

    config = DashboardConfig()
    setup_logger(config.LOG_LEVEL, config.LOG_FILE)
    try:
        return asyncio.run(watch_assignments(Dashboard(config), args.username, args.password, args.auto))
    except KeyboardInterrupt:
        logger.info("Dashboard watcher stopped")
        return 0

if __name__ == "__main__":
    raise SystemExit(main())

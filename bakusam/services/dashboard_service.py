from datetime import datetime, timedelta
from sqlalchemy import select, func
from bakusam.models.driver import Driver, DriverStatus
from bakusam.models.order import Order, OrderStatus
import logging

logger = logging.getLogger(__name__)

class DashboardService:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def _count_by_status(self, session, model) -> dict:
        result = await session.execute(
            select(model.status, func.count(model.id)).group_by(model.status)
        )
        return {status: count for status, count in result.all()}

    async def get_driver_stats(self, session) -> dict:
        counts = await self._count_by_status(session, Driver)
        return {
            "total": sum(counts.values()),
            "active": counts.get(DriverStatus.ACTIVE, 0),
            "suspended": counts.get(DriverStatus.SUSPENDED, 0),
            "pending": counts.get(DriverStatus.PENDING, 0),
        }

    async def get_order_stats(self, session) -> dict:
        counts = await self._count_by_status(session, Order)
        return {
            "total": sum(counts.values()),
            "pending": counts.get(OrderStatus.PENDING, 0),
            "completed": counts.get(OrderStatus.COMPLETED, 0),
            "cancelled": counts.get(OrderStatus.CANCELLED, 0),
        }

    async def get_revenue_stats(self, session, now: datetime = None) -> dict:
        """Completed-order revenue by order date for today, this week and this month.

        Weeks start on Sunday.
        """
        now = now or datetime.utcnow()
        start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        start_of_week = start_of_today - timedelta(days=(start_of_today.weekday() + 1) % 7)
        start_of_month = start_of_today.replace(day=1)
        earliest = min(start_of_week, start_of_month)

        result = await session.execute(
            select(Order.order_date, Order.total_fare)
            .where(Order.status == OrderStatus.COMPLETED)
            .where(Order.order_date >= earliest)
        )
        rows = result.all()

        def total_since(start):
            return round(sum(fare or 0 for order_date, fare in rows if order_date >= start), 2)

        return {
            "today": total_since(start_of_today),
            "thisWeek": total_since(start_of_week),
            "thisMonth": total_since(start_of_month),
        }

    async def get_stats(self, now: datetime = None) -> dict:
        async with self.session_factory() as session:
            try:
                stats = {
                    "drivers": await self.get_driver_stats(session),
                    "orders": await self.get_order_stats(session),
                    "revenue": await self.get_revenue_stats(session, now),
                }
                logger.debug(f"Dashboard stats: {stats}")
                return {"stats": stats, "status": 200}
            except Exception as e:
                logger.error(f"Failed to compute dashboard stats: {str(e)}", exc_info=True)
                return {"error": "Failed to fetch dashboard stats", "status": 500}

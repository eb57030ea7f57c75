import asyncio
import logging
from quart import Quart, jsonify
from quart_cors import cors
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from bakusam.config.settings import Config
from bakusam.core.db_config import DatabaseConfig
from bakusam.core.jwt import JWTConfig
from bakusam.middleware.logger import setup_logger
from bakusam.middleware.rate_limit import RateLimitMiddleware
from bakusam.models import Base
from bakusam.routes.auth import init_auth_routes
from bakusam.routes.resource_routes import init_resource_routes
from bakusam.routes.dashboard_routes import init_dashboard_routes
from bakusam.routes.driver_app_routes import init_driver_app_routes
from bakusam.services.auth import AuthService
from bakusam.services.customer_service import CustomerService
from bakusam.services.driver_service import DriverService
from bakusam.services.notification_service import NotificationService
from bakusam.services.order_service import OrderService
from bakusam.services.photo_service import PhotoService
from bakusam.services.pricing_service import PricingRuleService, PromotionService
from bakusam.services.vehicle_service import VehicleService

logger = logging.getLogger(__name__)

async def init_db(db_url: str, **engine_options):
    try:
        engine = create_async_engine(
            db_url,
            echo=False,
            future=True,
            **engine_options
        )
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async_session = sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False
        )
        logger.info("Database connected and tables created")
        return engine, async_session
    except Exception as e:
        logger.error(f"Database connection failed: {str(e)}", exc_info=True)
        raise

def create_app(config: Config, async_session) -> Quart:
    app = Quart(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_SIZE

    auth_service = AuthService(async_session, JWTConfig(config))
    order_service = OrderService(async_session)
    resources = {
        "orders": order_service,
        "drivers": DriverService(async_session),
        "customers": CustomerService(async_session),
        "vehicles": VehicleService(async_session),
        "notifications": NotificationService(async_session),
        "pricing-rules": PricingRuleService(async_session),
        "promotions": PromotionService(async_session),
    }

    @app.route('/api/health', methods=['GET'])
    @app.route('/api/v1/health', methods=['GET'])
    async def health_check():
        try:
            async with async_session() as session:
                await session.execute(text("SELECT 1"))
            return jsonify({"status": "healthy", "database": "connected"}), 200
        except Exception as e:
            logger.error(f"Health check failed: {str(e)}", exc_info=True)
            return jsonify({"status": "unhealthy", "database": "disconnected"}), 500

    app.register_blueprint(init_auth_routes(auth_service))
    for path, service in resources.items():
        app.register_blueprint(init_resource_routes(path, service, auth_service))
    app.register_blueprint(init_dashboard_routes(async_session, auth_service))
    app.register_blueprint(init_driver_app_routes(
        order_service, PhotoService(async_session, config.UPLOAD_DIR), auth_service
    ))

    # Apply CORS settings
    app = cors(app, allow_origin=config.ALLOWED_ORIGINS)

    # Rate limiting wraps the ASGI app
    app.asgi_app = RateLimitMiddleware(app.asgi_app, config.RATE_LIMIT)
    return app

async def main():
    config = Config()
    setup_logger(config.LOG_LEVEL, config.LOG_FILE)

    # Initialize database connection
    engine, async_session = await init_db(DatabaseConfig(config).get_db_url())

    if config.SEED_DEMO_USERS:
        await AuthService(async_session, JWTConfig(config)).ensure_demo_users()

    app = create_app(config, async_session)

    # Start Quart server
    logger.info(f"Quart server starting on {config.HOST}:{config.PORT}")
    from hypercorn.config import Config as HypercornConfig
    from hypercorn.asyncio import serve

    hypercorn_config = HypercornConfig()
    hypercorn_config.bind = [f"{config.HOST}:{config.PORT}"]
    hypercorn_config.loglevel = config.LOG_LEVEL.lower()

    try:
        await serve(app, hypercorn_config)
    finally:
        await engine.dispose()

def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Server shutdown initiated")
    except Exception as e:
        logger.error(f"Server failed to start: {str(e)}", exc_info=True)
        raise

if __name__ == "__main__":
    run()

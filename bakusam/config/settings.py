import os
from dotenv import load_dotenv
from typing import Optional

class Config:
    def __init__(self):
        load_dotenv()

        # App Environment
        self.APP_ENV = os.getenv("APP_ENV", "production")
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.PORT = int(os.getenv("PORT", 5000))
        self.HOST = os.getenv("HOST", "127.0.0.1")

        # Secret Key
        self.SECRET_KEY = os.getenv("SECRET_KEY")
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
        self.JWT_EXPIRATION_TIME = int(os.getenv("JWT_EXPIRATION_TIME", 3600))

        # Database Config
        self.DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
        self.DB_HOST = os.getenv("DB_HOST")
        self.DB_PORT = os.getenv("DB_PORT")
        self.DB_NAME = os.getenv("DB_NAME")
        self.DB_USER = os.getenv("DB_USER")
        self.DB_PASSWORD = os.getenv("DB_PASSWORD")

        # Demo accounts (admin/admin123, regional/regional123) seeded on start-up
        self.SEED_DEMO_USERS = os.getenv("SEED_DEMO_USERS", "True").lower() == "true"

        # Photo uploads from the driver app
        self.UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
        self.MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 16 * 1024 * 1024))

        # Rate Limiting
        self.RATE_LIMIT = os.getenv("RATE_LIMIT", "100 per minute")

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = os.getenv("LOG_FILE", "app.log")

        # CORS
        self.ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*")

        # Validate configuration
        self._validate()

    def _validate(self):
        required_fields = ["SECRET_KEY"]
        if not self.DATABASE_URL:
            required_fields += ["DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD"]

        for field in required_fields:
            if not getattr(self, field):
                raise ValueError(f"Missing required configuration: {field}")


class DashboardConfig:
    """Settings for the dashboard client (API location, local storage, polling)."""

    def __init__(self):
        load_dotenv()

        self.API_BASE_URL = os.getenv("DASHBOARD_API_URL", "http://127.0.0.1:5000")
        self.STORAGE_FILE = os.getenv("DASHBOARD_STORAGE_FILE", ".bakusam-dashboard.json")
        self.REQUEST_TIMEOUT = float(os.getenv("DASHBOARD_REQUEST_TIMEOUT", 10))

        # Polling intervals of the assignment view, in seconds
        self.PENDING_ORDERS_INTERVAL = float(os.getenv("PENDING_ORDERS_INTERVAL", 5))
        self.AVAILABLE_DRIVERS_INTERVAL = float(os.getenv("AVAILABLE_DRIVERS_INTERVAL", 10))

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = os.getenv("DASHBOARD_LOG_FILE", "dashboard.log")

import pytest
from sqlalchemy.pool import StaticPool
from bakusam.config.settings import Config
from bakusam.core.jwt import JWTConfig
from bakusam.main import create_app, init_db
from bakusam.services.auth import AuthService

# Test configuration
@pytest.fixture
def config(tmp_path):
    class TestConfig(Config):
        def __init__(self):
            self.APP_ENV = "testing"
            self.DEBUG = True
            self.PORT = 5000
            self.HOST = "127.0.0.1"
            self.SECRET_KEY = "test-secret-key"
            self.JWT_ALGORITHM = "HS256"
            self.JWT_EXPIRATION_TIME = 3600
            self.DATABASE_URL = "sqlite+aiosqlite://"
            self.DB_HOST = None
            self.DB_PORT = None
            self.DB_NAME = None
            self.DB_USER = None
            self.DB_PASSWORD = None
            self.SEED_DEMO_USERS = True
            self.UPLOAD_DIR = str(tmp_path / "uploads")
            self.MAX_UPLOAD_SIZE = 1024 * 1024
            self.RATE_LIMIT = "10000 per minute"
            self.LOG_LEVEL = "DEBUG"
            self.LOG_FILE = str(tmp_path / "test.log")
            self.ALLOWED_ORIGINS = "*"

        def _validate(self):
            pass  # Skip validation for in-memory SQLite

    return TestConfig()

@pytest.fixture
async def async_session(config):
    engine, session_factory = await init_db(config.DATABASE_URL, poolclass=StaticPool)
    yield session_factory
    await engine.dispose()

@pytest.fixture
async def auth_service(config, async_session):
    service = AuthService(async_session, JWTConfig(config))
    await service.ensure_demo_users()
    return service

@pytest.fixture
async def app(config, async_session, auth_service):
    return create_app(config, async_session)

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
async def headers(client):
    response = await client.post('/api/auth/login', json={"username": "admin", "password": "admin123"})
    data = await response.get_json()
    return {"Authorization": f"Bearer {data['token']}"}

def driver_payload(index: int = 1, **overrides) -> dict:
    payload = {
        "fullName": f"Driver {index}",
        "phone": f"08123456{index:04d}",
        "email": f"driver{index}@example.com",
        "nik": f"320123456789{index:04d}",
        "address": f"Jl. Merdeka No. {index}, Jakarta",
        "simNumber": f"SIM{index:06d}",
        "vehicleType": "motor",
    }
    payload.update(overrides)
    return payload

def customer_payload(index: int = 1, **overrides) -> dict:
    payload = {
        "fullName": f"Customer {index}",
        "phone": f"08223456{index:04d}",
        "email": f"customer{index}@example.com",
        "address": f"Jl. Thamrin No. {index}, Jakarta",
    }
    payload.update(overrides)
    return payload

@pytest.fixture
async def create(client, headers):
    """POST a resource and return its JSON, failing the test on any error."""
    async def _create(path: str, payload: dict) -> dict:
        response = await client.post(f'/api/{path}', json=payload, headers=headers)
        data = await response.get_json()
        assert response.status_code == 201, data
        return data
    return _create

@pytest.fixture
async def customer(create):
    return await create("customers", customer_payload(1, fullName="Andi Wijaya"))

@pytest.fixture
async def driver(create):
    return await create("drivers", driver_payload(1, fullName="Budi Santoso", latitude=-6.1754, longitude=106.8272))

@pytest.fixture
async def order(create, customer):
    return await create("orders", {
        "customerId": customer["id"],
        "pickupAddress": "Jl. Sudirman No. 1, Jakarta Pusat",
        "deliveryAddress": "Jl. Thamrin No. 15, Jakarta Pusat",
        "distance": 3.2,
        "baseFare": 8000,
        "totalFare": 16000,
        "vehicleType": "motor",
    })

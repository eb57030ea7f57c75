import pytest
from bakusam.core.jwt import JWTConfig

@pytest.mark.asyncio
async def test_login_admin(client):
    response = await client.post('/api/auth/login', json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    data = await response.get_json()
    assert data["token"]
    assert data["user"]["username"] == "admin"
    assert data["user"]["role"] == "admin"
    assert data["user"]["fullName"] == "Administrator Bakusam"

@pytest.mark.asyncio
async def test_login_regional(client):
    response = await client.post('/api/auth/login', json={"username": "regional", "password": "regional123"})
    assert response.status_code == 200
    data = await response.get_json()
    assert data["user"]["role"] == "regional"

@pytest.mark.asyncio
@pytest.mark.parametrize("username,password", [
    ("admin", "wrong"),
    ("regional", "admin123"),
    ("nobody", "admin123"),
])
async def test_login_rejects_other_pairs(client, username, password):
    response = await client.post('/api/auth/login', json={"username": username, "password": password})
    assert response.status_code == 401
    data = await response.get_json()
    assert data["error"] == "Username atau password tidak valid"

@pytest.mark.asyncio
async def test_login_missing_fields(client):
    response = await client.post('/api/auth/login', json={"username": "admin"})
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_me_returns_token_owner(client, headers):
    response = await client.get('/api/auth/me', headers=headers)
    assert response.status_code == 200
    data = await response.get_json()
    assert data["role"] == "admin"

@pytest.mark.asyncio
async def test_protected_routes_require_token(client):
    for path in ['/api/orders', '/api/drivers', '/api/dashboard/stats', '/api/driver/current-order?driverId=1']:
        response = await client.get(path)
        assert response.status_code == 401, path

@pytest.mark.asyncio
async def test_invalid_token_rejected(client):
    response = await client.get('/api/orders', headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401

@pytest.mark.asyncio
async def test_token_signed_with_other_secret_rejected(client, config):
    config.SECRET_KEY = "another-secret"
    token = JWTConfig(config).create_access_token({"sub": "1", "role": "admin"})
    response = await client.get('/api/orders', headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401

@pytest.mark.asyncio
async def test_demo_users_seeded_once(auth_service):
    assert await auth_service.ensure_demo_users() == 0

@pytest.mark.asyncio
async def test_health_is_public(client):
    for path in ['/api/health', '/api/v1/health']:
        response = await client.get(path)
        assert response.status_code == 200
        data = await response.get_json()
        assert data["database"] == "connected"

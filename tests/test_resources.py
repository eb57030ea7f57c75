import pytest
from conftest import customer_payload, driver_payload

@pytest.mark.asyncio
async def test_create_and_get_driver(client, headers, driver):
    assert driver["fullName"] == "Budi Santoso"
    assert driver["status"] == "active"
    assert driver["totalOrders"] == 0
    assert driver["commission"] == 70

    response = await client.get(f'/api/drivers/{driver["id"]}', headers=headers)
    assert response.status_code == 200
    data = await response.get_json()
    assert data["simNumber"] == "SIM000001"

@pytest.mark.asyncio
async def test_list_drivers(client, headers, create):
    for index in range(1, 4):
        await create("drivers", driver_payload(index))
    response = await client.get('/api/drivers', headers=headers)
    assert response.status_code == 200
    data = await response.get_json()
    assert len(data) == 3
    assert {d["email"] for d in data} == {"driver1@example.com", "driver2@example.com", "driver3@example.com"}

@pytest.mark.asyncio
async def test_create_missing_required_fields(client, headers):
    response = await client.post('/api/drivers', json={"fullName": "Ahmad Rizki"}, headers=headers)
    assert response.status_code == 400
    data = await response.get_json()
    assert data["error"] == "Missing required fields"
    assert "phone" in data["fields"]
    assert "fullName" not in data["fields"]

@pytest.mark.asyncio
async def test_create_invalid_json(client, headers):
    response = await client.post(
        '/api/customers', data="not json", headers=dict(headers, **{"Content-Type": "application/json"})
    )
    assert response.status_code == 400
    data = await response.get_json()
    assert data["error"] == "Invalid JSON format"

@pytest.mark.asyncio
async def test_invalid_enum_value(client, headers):
    response = await client.post('/api/drivers', json=driver_payload(1, status="sleeping"), headers=headers)
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_unique_violation_conflict(client, headers, create):
    await create("customers", customer_payload(1))
    response = await client.post('/api/customers', json=customer_payload(2, phone=customer_payload(1)["phone"]), headers=headers)
    assert response.status_code == 409

@pytest.mark.asyncio
async def test_unknown_id_not_found(client, headers):
    for method in ("get", "patch", "delete"):
        call = getattr(client, method)
        kwargs = {"json": {"fullName": "x"}} if method == "patch" else {}
        response = await call('/api/customers/999', headers=headers, **kwargs)
        assert response.status_code == 404, method

@pytest.mark.asyncio
async def test_patch_updates_only_given_fields(client, headers, customer):
    response = await client.patch(f'/api/customers/{customer["id"]}', json={"status": "blocked"}, headers=headers)
    assert response.status_code == 200
    data = await response.get_json()
    assert data["status"] == "blocked"
    assert data["fullName"] == "Andi Wijaya"

@pytest.mark.asyncio
async def test_put_requires_full_payload(client, headers, customer):
    response = await client.put(f'/api/customers/{customer["id"]}', json={"status": "blocked"}, headers=headers)
    assert response.status_code == 400

    response = await client.put(
        f'/api/customers/{customer["id"]}', json=customer_payload(1, fullName="Andi W."), headers=headers
    )
    assert response.status_code == 200
    data = await response.get_json()
    assert data["fullName"] == "Andi W."

@pytest.mark.asyncio
async def test_read_only_fields_ignored(client, headers, driver):
    response = await client.patch(f'/api/drivers/{driver["id"]}', json={"totalOrders": 99}, headers=headers)
    assert response.status_code == 200
    data = await response.get_json()
    assert data["totalOrders"] == 0

@pytest.mark.asyncio
async def test_delete_customer(client, headers, customer):
    response = await client.delete(f'/api/customers/{customer["id"]}', headers=headers)
    assert response.status_code == 200
    response = await client.get(f'/api/customers/{customer["id"]}', headers=headers)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_vehicle_enriched_with_driver(client, headers, create, driver):
    vehicle = await create("vehicles", {
        "driverId": driver["id"],
        "vehicleType": "motor",
        "brand": "Honda",
        "model": "Beat",
        "year": 2021,
        "plateNumber": "B 1234 ABC",
        "stnkNumber": "STNK0001",
    })
    assert vehicle["status"] == "verified"
    assert vehicle["driver"] == {"id": driver["id"], "fullName": "Budi Santoso"}

@pytest.mark.asyncio
async def test_vehicle_for_unknown_driver(client, headers):
    response = await client.post('/api/vehicles', json={
        "driverId": 42,
        "vehicleType": "mobil",
        "brand": "Toyota",
        "model": "Avanza",
        "year": 2020,
        "plateNumber": "B 3456 CDE",
        "stnkNumber": "STNK0003",
    }, headers=headers)
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_notification_defaults(create):
    notification = await create("notifications", {
        "title": "Maintenance",
        "message": "Sistem akan maintenance malam ini",
        "type": "warning",
        "targetType": "drivers",
    })
    assert notification["isRead"] is False
    assert notification["createdDate"]

@pytest.mark.asyncio
async def test_promotion_end_before_start(client, headers):
    response = await client.post('/api/promotions', json={
        "title": "Diskon",
        "description": "Potongan 20%",
        "discountType": "percentage",
        "discountValue": 20,
        "startDate": "2024-02-01T00:00:00Z",
        "endDate": "2024-01-01T00:00:00Z",
    }, headers=headers)
    assert response.status_code == 400

@pytest.mark.asyncio
async def test_promotion_created(create):
    promotion = await create("promotions", {
        "title": "Diskon Pengguna Baru",
        "description": "Potongan 20% untuk order pertama",
        "discountType": "percentage",
        "discountValue": 20,
        "maxDiscount": 15000,
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2024-01-31T00:00:00+07:00",
    })
    assert promotion["isActive"] is True
    assert promotion["usageCount"] == 0
    assert promotion["endDate"] == "2024-01-30T17:00:00"

@pytest.mark.asyncio
async def test_promotion_update_end_before_start(client, headers, create):
    promotion = await create("promotions", {
        "title": "Promo Akhir Pekan",
        "description": "Potongan 10%",
        "discountType": "percentage",
        "discountValue": 10,
        "startDate": "2024-03-01T00:00:00Z",
        "endDate": "2024-03-31T00:00:00Z",
    })
    response = await client.patch(f'/api/promotions/{promotion["id"]}', json={
        "endDate": "2024-02-01T00:00:00Z",
    }, headers=headers)
    assert response.status_code == 400
    data = await response.get_json()
    assert data["error"] == "endDate must not be before startDate"

    response = await client.patch(f'/api/promotions/{promotion["id"]}', json={
        "startDate": "2024-04-01T00:00:00Z",
    }, headers=headers)
    assert response.status_code == 400

    response = await client.get(f'/api/promotions/{promotion["id"]}', headers=headers)
    current = await response.get_json()
    assert current["startDate"] == "2024-03-01T00:00:00"
    assert current["endDate"] == "2024-03-31T00:00:00"

    response = await client.patch(f'/api/promotions/{promotion["id"]}', json={
        "endDate": "2024-04-15T00:00:00Z",
    }, headers=headers)
    assert response.status_code == 200

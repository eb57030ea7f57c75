# Database utilities: connection check and demo data seeding.
#
#   python -m bakusam.tools.db_tools check
#   python -m bakusam.tools.db_tools seed

import argparse
import asyncio
import sys
from datetime import datetime, timedelta
from sqlalchemy import func, inspect, select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from bakusam.config.settings import Config
from bakusam.core.db_config import DatabaseConfig
from bakusam.core.jwt import JWTConfig
from bakusam.models import (
    Base, Customer, DiscountType, Driver, DriverStatus, Order, OrderStatus,
    PricingRule, Promotion, Vehicle, VehicleStatus,
)
from bakusam.services.auth import AuthService

DRIVERS = [
    {"full_name": "Budi Santoso", "phone": "081234567890", "email": "budi@example.com",
     "nik": "3201234567890001", "address": "Jl. Merdeka No. 10, Jakarta", "sim_number": "SIM123456789",
     "vehicle_type": "motor", "rating": 4.8, "total_orders": 245, "latitude": -6.1754, "longitude": 106.8272},
    {"full_name": "Ahmad Rizki", "phone": "081234567891", "email": "ahmad@example.com",
     "nik": "3201234567890002", "address": "Jl. Sudirman No. 25, Jakarta", "sim_number": "SIM123456790",
     "vehicle_type": "motor", "rating": 4.7, "total_orders": 189, "latitude": -6.2088, "longitude": 106.8456},
    {"full_name": "Dedi Kurniawan", "phone": "081234567892", "email": "dedi@example.com",
     "nik": "3201234567890003", "address": "Jl. Gatot Subroto No. 5, Jakarta", "sim_number": "SIM123456791",
     "vehicle_type": "mobil", "rating": 4.6, "total_orders": 98},
    {"full_name": "Eko Prasetyo", "phone": "081234567893", "email": "eko@example.com",
     "nik": "3201234567890004", "address": "Jl. Thamrin No. 3, Jakarta", "sim_number": "SIM123456792",
     "vehicle_type": "pickup", "status": DriverStatus.PENDING},
]

VEHICLES = [
    ("motor", "Honda", "Beat", 2021, "B 1234 ABC", "STNK0001"),
    ("motor", "Yamaha", "NMAX", 2022, "B 2345 BCD", "STNK0002"),
    ("mobil", "Toyota", "Avanza", 2020, "B 3456 CDE", "STNK0003"),
    ("pickup", "Suzuki", "Carry", 2019, "B 4567 DEF", "STNK0004"),
]

CUSTOMERS = [
    {"full_name": "Andi Wijaya", "phone": "082234567890", "email": "andi@example.com",
     "address": "Jl. Gatot Subroto No. 15, Jakarta", "total_orders": 23},
    {"full_name": "Sari Indah", "phone": "082234567891", "email": "sari@example.com",
     "address": "Jl. Thamrin No. 8, Jakarta", "total_orders": 15},
]

PRICING_RULES = [
    ("motor", 8000, 2500),
    ("mobil", 15000, 4000),
    ("pickup", 25000, 5000),
    ("truck", 50000, 8000),
]

def make_session_factory(db_url: str):
    engine = create_async_engine(db_url, echo=False, future=True)
    return engine, sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

async def check(db_url: str) -> int:
    print("🔌 Testing database connection...\n")
    engine, async_session = make_session_factory(db_url)
    try:
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        print("✅ Database connection successful!")
        print(f"📋 Tables ({len(tables)}):")
        for index, table in enumerate(sorted(tables), start=1):
            print(f"   {index}. {table}")

        async with async_session() as session:
            print("\n📊 Data loaded:")
            for label, model in (("Drivers", Driver), ("Orders", Order), ("Customers", Customer)):
                if model.__tablename__ not in tables:
                    print(f"   {label}: table missing")
                    continue
                total = (await session.execute(select(func.count(model.id)))).scalar()
                print(f"   {label}: {total}")
        return 0
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        print("\n🔧 Please check:")
        print("   1. The database server is running")
        print("   2. DATABASE_URL or DB_* credentials are correct")
        print("   3. The database exists")
        print("   4. The user has proper permissions")
        return 1
    finally:
        await engine.dispose()

async def seed(config: Config, db_url: str) -> int:
    engine, async_session = make_session_factory(db_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        created_users = await AuthService(async_session, JWTConfig(config)).ensure_demo_users()
        print(f"✅ Demo users created: {created_users}")

        async with async_session() as session:
            existing = (await session.execute(select(func.count(Driver.id)))).scalar()
            if existing:
                print(f"⚠️  {existing} driver(s) already present, skipping demo data.")
                return 0

            drivers = [Driver(**data) for data in DRIVERS]
            customers = [Customer(**data) for data in CUSTOMERS]
            session.add_all(drivers + customers)
            await session.flush()

            for driver, (vehicle_type, brand, model, year, plate, stnk) in zip(drivers, VEHICLES):
                session.add(Vehicle(
                    driver_id=driver.id, vehicle_type=vehicle_type, brand=brand, model=model,
                    year=year, plate_number=plate, stnk_number=stnk, status=VehicleStatus.VERIFIED
                ))

            for vehicle_type, base_fare, per_km_rate in PRICING_RULES:
                session.add(PricingRule(vehicle_type=vehicle_type, base_fare=base_fare, per_km_rate=per_km_rate))

            now = datetime.utcnow()
            session.add_all([
                Order(customer_id=customers[0].id, pickup_address="Jl. Sudirman No. 1, Jakarta Pusat",
                      delivery_address="Jl. Thamrin No. 15, Jakarta Pusat",
                      pickup_latitude=-6.2088, pickup_longitude=106.8456,
                      delivery_latitude=-6.1944, delivery_longitude=106.8229,
                      distance=3.2, vehicle_type="motor", base_fare=8000, total_fare=16000,
                      status=OrderStatus.PENDING, order_date=now),
                Order(customer_id=customers[1].id, driver_id=drivers[0].id,
                      pickup_address="Jl. Kemang Raya No. 7, Jakarta Selatan",
                      delivery_address="Jl. Senopati No. 22, Jakarta Selatan",
                      distance=4.5, vehicle_type="motor", base_fare=8000, total_fare=19250,
                      status=OrderStatus.COMPLETED, order_date=now - timedelta(hours=3),
                      completed_date=now - timedelta(hours=2), rating=5),
                Order(customer_id=customers[0].id, pickup_address="Jl. Gajah Mada No. 9, Jakarta Barat",
                      delivery_address="Jl. Hayam Wuruk No. 30, Jakarta Barat",
                      distance=6.0, vehicle_type="mobil", base_fare=15000, total_fare=39000,
                      status=OrderStatus.CANCELLED, order_date=now - timedelta(days=1)),
            ])

            session.add(Promotion(
                title="Diskon Pengguna Baru", description="Potongan 20% untuk order pertama",
                discount_type=DiscountType.PERCENTAGE, discount_value=20, max_discount=15000,
                start_date=now, end_date=now + timedelta(days=30), usage_limit=1000
            ))
            await session.commit()
        print("✅ Demo drivers, vehicles, customers, orders, pricing rules and promotions loaded.")
        return 0
    except Exception as e:
        print(f"❌ Seeding failed: {e}")
        return 1
    finally:
        await engine.dispose()

def main(argv=None):
    parser = argparse.ArgumentParser(description="Bakusam Express database utilities")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Test the connection and print table/row counts")
    subparsers.add_parser("seed", help="Create tables and load demo data")
    args = parser.parse_args(argv)

    config = Config()
    db_url = DatabaseConfig(config).get_db_url()
    if args.command == "check":
        code = asyncio.run(check(db_url))
    else:
        code = asyncio.run(seed(config, db_url))
    sys.exit(code)

if __name__ == "__main__":
    main()

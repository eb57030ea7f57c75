from passlib.context import CryptContext
from bakusam.models.user import User, UserRole
from bakusam.core.jwt import JWTConfig
from sqlalchemy import select
import logging

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "full_name": "Administrator Bakusam",
        "email": "admin@bakusamexpress.com",
        "role": UserRole.ADMIN,
    },
    {
        "username": "regional",
        "password": "regional123",
        "full_name": "Admin Regional",
        "email": "regional@bakusamexpress.com",
        "role": UserRole.REGIONAL,
    },
]

class AuthService:
    def __init__(self, session_factory, jwt_config: JWTConfig):
        self.session_factory = session_factory
        self.jwt_config = jwt_config
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def serialize_user(self, user: User) -> dict:
        return {
            "id": user.id,
            "username": user.username,
            "fullName": user.full_name,
            "email": user.email,
            "role": user.role.value,
        }

    async def ensure_demo_users(self) -> int:
        """Create the demo accounts that do not exist yet; returns how many were added."""
        async with self.session_factory() as session:
            try:
                created = 0
                for demo in DEMO_USERS:
                    result = await session.execute(
                        select(User).where(User.username == demo["username"])
                    )
                    if result.scalars().first():
                        continue
                    session.add(User(
                        username=demo["username"],
                        full_name=demo["full_name"],
                        email=demo["email"],
                        hashed_password=self.pwd_context.hash(demo["password"]),
                        role=demo["role"],
                        is_active=True
                    ))
                    created += 1
                await session.commit()
                if created:
                    logger.info(f"Seeded {created} demo user(s)")
                return created
            except Exception as e:
                await session.rollback()
                logger.error(f"Seeding demo users failed: {str(e)}", exc_info=True)
                raise

    async def login(self, username: str, password: str) -> dict:
        async with self.session_factory() as session:
            try:
                # Find user
                result = await session.execute(
                    select(User).where(User.username == username)
                )
                user = result.scalars().first()
                if not user:
                    logger.warning(f"Login attempt with non-existent username: {username}")
                    return {"error": "Username atau password tidak valid", "status": 401}

                # Verify password
                if not self.pwd_context.verify(password, user.hashed_password):
                    logger.warning(f"Invalid password attempt for username: {username}")
                    return {"error": "Username atau password tidak valid", "status": 401}

                if not user.is_active:
                    logger.warning(f"Login attempt for inactive user: {username}")
                    return {"error": "Account is inactive", "status": 403}

                # Generate JWT token
                token = self.jwt_config.create_access_token({"sub": str(user.id), "role": user.role.value})
                logger.info(f"User logged in successfully: {username}")
                return {"token": token, "user": self.serialize_user(user)}
            except Exception as e:
                logger.error(f"Login failed for {username}: {str(e)}", exc_info=True)
                return {"error": f"Login failed: {str(e)}", "status": 500}

    async def validate_user_token(self, token: str) -> dict:
        async with self.session_factory() as session:
            try:
                # Verify JWT token
                payload = self.jwt_config.decode_access_token(token)
                if payload is None:
                    logger.warning("Invalid JWT token: signature or expiry check failed")
                    return {"error": "Invalid token", "status": 401}
                user_id = payload.get("sub")
                if not user_id:
                    logger.warning("Invalid token: no user_id in payload")
                    return {"error": "Invalid token", "status": 401}

                # Find user
                result = await session.execute(
                    select(User).where(User.id == int(user_id))
                )
                user = result.scalars().first()
                if not user:
                    logger.warning(f"Token validation failed: user_id {user_id} not found")
                    return {"error": "User not found", "status": 404}

                if not user.is_active:
                    logger.warning(f"Token validation failed: user_id {user_id} is inactive")
                    return {"error": "Account is inactive", "status": 403}

                return {"user_id": user.id, "role": user.role.value, "status": 200}
            except ValueError as e:
                logger.warning(f"Invalid JWT token: {str(e)}")
                return {"error": "Invalid token", "status": 401}
            except Exception as e:
                logger.error(f"Token validation failed: {str(e)}", exc_info=True)
                return {"error": f"Token validation failed: {str(e)}", "status": 500}

import json
from bakusam.dashboard.api_client import ApiClient, ApiError
from bakusam.dashboard.storage import LocalStorage
from bakusam.dashboard.toast import Toaster
import logging

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_KEY = "adminUser"
LANGUAGE_KEY = "bakusam-language"

DEMO_CREDENTIALS = {
    "admin": ("admin", "admin123"),
    "regional": ("regional", "regional123"),
}

class LoginSession:
    """Dashboard login state backed by local storage.

    A successful login stores the token under ``authToken`` and the user
    object as JSON under ``adminUser`` and navigates to ``/dashboard``;
    logout removes both keys and navigates to ``/login``.
    """

    def __init__(self, api: ApiClient, storage: LocalStorage, toaster: Toaster, navigate=None):
        self.api = api
        self.storage = storage
        self.toaster = toaster
        self.location = None
        self._navigate = navigate
        self.user = None
        self._restore()

    def _restore(self):
        token = self.storage.get_item(TOKEN_KEY)
        user_data = self.storage.get_item(USER_KEY)
        if not token or not user_data:
            return
        try:
            user = json.loads(user_data)
            if not isinstance(user, dict):
                raise ValueError("adminUser is not an object")
        except ValueError as e:
            logger.warning(f"Discarding stored session: {str(e)}")
            self.storage.remove_item(TOKEN_KEY)
            self.storage.remove_item(USER_KEY)
            return
        self.user = user
        self.api.set_token(token)
        logger.info(f"Restored session for {user.get('username')}")

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def current_user(self):
        return self.user

    def navigate(self, path: str):
        self.location = path
        if self._navigate:
            self._navigate(path)

    async def login(self, username: str, password: str) -> bool:
        if not username or not password:
            self.toaster.error("Username dan password wajib diisi", title="❌ Login Gagal")
            return False

        try:
            response = await self.api.post("/api/auth/login", {"username": username, "password": password})
        except ApiError as e:
            logger.warning(f"Login failed for {username}: {e.message}")
            self.toaster.error(e.message or "Username atau password tidak valid", title="❌ Login Gagal")
            return False

        self.storage.set_item(TOKEN_KEY, response["token"])
        self.storage.set_item(USER_KEY, json.dumps(response["user"]))
        self.api.set_token(response["token"])
        self.user = response["user"]
        logger.info(f"Logged in as {username}")
        self.toaster.show(
            "🎉 Login Berhasil!",
            f"Selamat datang kembali, {self.user.get('fullName', username)}!"
        )
        self.navigate("/dashboard")
        return True

    async def demo_login(self, role: str) -> bool:
        username, password = DEMO_CREDENTIALS[role]
        return await self.login(username, password)

    def logout(self):
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)
        self.api.set_token(None)
        if self.user:
            logger.info(f"Logged out {self.user.get('username')}")
        self.user = None
        self.navigate("/login")

    @property
    def language(self) -> str:
        return self.storage.get_item(LANGUAGE_KEY) or "id"

    def set_language(self, language: str):
        self.storage.set_item(LANGUAGE_KEY, language)

from bakusam.config.settings import Config

class DatabaseConfig:
    def __init__(self, config: Config):
        self.database_url = config.DATABASE_URL
        self.db_host = config.DB_HOST
        self.db_port = config.DB_PORT
        self.db_name = config.DB_NAME
        self.db_user = config.DB_USER
        self.db_password = config.DB_PASSWORD

    def get_db_url(self):
        # DATABASE_URL wins, e.g. sqlite+aiosqlite:///bakusam.db for local runs
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

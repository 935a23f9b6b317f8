from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field
from functools import lru_cache
from pathlib import Path
import secrets

# Get the project root (repository root, above backend/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):

    # Application
    app_env: str = "development"
    app_debug: bool = False

    # PostgreSQL Configuration
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "newsdesk_db"
    postgres_user: str = "newsdesk_user"
    postgres_password: str = ""

    # SQLite (local dev and tests)
    use_sqlite: bool = False
    sqlite_url: str = "sqlite+aiosqlite:///./data/newsdesk.db"

    @computed_field
    @property
    def database_url(self) -> str:
        """Return the appropriate database URL based on configuration."""
        if self.use_sqlite:
            return self.sqlite_url
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Database pooling (PostgreSQL)
    db_pool_size: int = 10
    db_max_overflow: int = 5
    db_pool_recycle: int = 1800

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    # Public base URL used when building checkout links
    site_url: str = "http://localhost:3000"

    # Authentication - JWT in an httpOnly cookie
    secret_key: str = secrets.token_urlsafe(32)  # Generate random if not set
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    cookie_access_token_name: str = "access_token"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    # Newsletter sending (simulated, no mail transport)
    send_simulated_delay_seconds: float = 1.0

    # Mock checkout
    checkout_simulated_delay_seconds: float = 2.0

    # Dashboard
    dashboard_open_rate: str = "24.5%"
    dashboard_recent_newsletters: int = 10

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


# Singleton instance for easy import
settings = get_settings()

import os

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_desk.core.enums import TransitionPolicy
from order_desk.core.logger import setup_logger


class Settings(BaseSettings):

    # App Settings
    app_name: str = "Order Desk API"
    app_version: str = "0.1.0"
    debug: bool = False

    # CORS Settings
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_origins: list[str] = ["*"]

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./order_desk.db"

    # Logging Settings
    log_dir: str = "logs"

    # Store Settings
    users_key: str = "users"
    orders_key: str = "orders"
    session_key: str = "session"

    # Ledger Settings
    transition_policy: TransitionPolicy = TransitionPolicy.PERMISSIVE
    seed_demo_accounts: bool = True

    model_config = SettingsConfigDict(env_file=".env")


@lru_cache
def get_settings():
    return Settings()


# Database logger instance
db_logger = setup_logger(
    "database_logger", os.path.join(get_settings().log_dir, "database_actions.log")
)

# Request logger instance
request_logger = setup_logger(
    "request_logger", os.path.join(get_settings().log_dir, "request_actions.log")
)

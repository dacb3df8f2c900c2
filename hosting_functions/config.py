from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

GOPAY_PRODUCTION_URL = "https://gate.gopay.cz/api"
GOPAY_SANDBOX_URL = "https://gw.sandbox.gopay.com/api"


class Settings(BaseSettings):
    """Function configuration read from environment variables."""

    # GoPay
    gopay_environment: str = "SANDBOX"
    gopay_go_id: str = ""
    gopay_client_id: str = ""
    gopay_client_secret: str = ""
    gopay_scope: str = "payment-all"
    gopay_lang: str = "CS"

    # Supabase (PostgREST)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    orders_table: str = "user_orders"

    # Direct Postgres connection to the same database (optional)
    db_host: str = ""
    db_port: int = 5432
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    db_schema: str = "public"

    # Resend
    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com"
    email_from: str = "Alatyr Hosting <orders@alatyr.cz>"
    dashboard_url: str = "https://alatyr.cz/dashboard"
    support_email: str = "support@alatyr.cz"

    # HTTP
    cors_allow_origin: str = "*"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def gopay_api_url(self) -> str:
        if self.gopay_environment.upper() == "PRODUCTION":
            return GOPAY_PRODUCTION_URL
        return GOPAY_SANDBOX_URL

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def db_enabled(self) -> bool:
        return bool(self.db_host and self.db_user and self.db_name)

    @property
    def db_dsn(self) -> str:
        if not self.db_enabled:
            return ""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"


@lru_cache
def get_settings() -> Settings:
    return Settings()

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Coupon API"
    version: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    APP_DATABASE_DSN: str = "sqlite:////tmp/coupons.db"
    # Upper bound in seconds for a single store call (lock wait, statement, pool checkout)
    DATABASE_TIMEOUT_SECONDS: float = 5.0

    # "database" or "memory"
    COUPON_STORE: str = "database"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def use_memory_store(self) -> bool:
        return self.COUPON_STORE.lower() == "memory"


settings = Settings()

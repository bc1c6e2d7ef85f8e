from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    CURRENCY: str = "RM"

    STORE_PROVIDER: str = "memory"  # "memory", "json", "appwrite"
    JSON_STORE_PATH: str = "./data/bookings.json"

    APPWRITE_ENDPOINT: str = "https://cloud.appwrite.io/v1"
    APPWRITE_PROJECT_ID: str | None = None
    APPWRITE_API_KEY: str | None = None
    APPWRITE_DATABASE_ID: str | None = None
    APPWRITE_BOOKINGS_COLLECTION_ID: str | None = None
    APPWRITE_TIMEOUT_SECONDS: float = 10.0

    ROOMS_STRICT: bool = True
    ALLOW_OVERPAYMENT: bool = True


settings = Settings()

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./studio_pos.db"
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    CURRENCY: str = "INR"
    TIMEZONE: str = "UTC"

    class Config:
        env_file = ".env"

settings = Settings()

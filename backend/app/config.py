from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_ENV: str = "development"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    FRONTEND_URL: str = "http://localhost:3000"
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/app.db"
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Données d'exemple au démarrage
    SEED_ON_STARTUP: bool = True

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    TOP_PHOTOS_LIMIT: int = 10

    class Config:
        env_file = ".env"


settings = Settings()

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Product Catalog"

    # DB
    DATABASE_URL: str = "sqlite:///./catalog.db"

    # Security / JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Catalog
    PRODUCTS_PER_PAGE: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

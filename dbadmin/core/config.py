from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Load env from .env file
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Database
    DATABASE_URL: str

    # Configuration storage (column comments / MIME transformations)
    CONFIG_STORAGE_ENABLED: bool = True

    # Transformation wrapper
    MAX_SIZE_PARAM: int = 2000  # Upper bound for newWidth/newHeight
    JPEG_QUALITY: int = 75
    RESIZE_TIMEOUT_SECONDS: float = 10.0

    LOG_LEVEL: str = "INFO"

# Instantiate settings
settings = Settings()

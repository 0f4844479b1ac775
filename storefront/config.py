# storefront/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path
from dotenv import load_dotenv

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

# Expose .env values to os.getenv users (seed script) as well
load_dotenv(env_path)

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./storefront.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Extra origin allowed by CORS (deployed frontend)
    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    # Dashboard
    LOW_STOCK_THRESHOLD: int = 10
    TOP_SELLING_LIMIT: int = 5

    # Cart summary pricing
    TAX_RATE: float = 0.08
    FREE_SHIPPING_THRESHOLD: float = 50.0
    SHIPPING_COST: float = 9.99

    DEFAULT_PAGE_SIZE: int = 20

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()

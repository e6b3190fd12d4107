from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Client configuration settings.
    All settings can be overridden via environment variables.
    """
    
    # Remote store (JSON-backed mock REST service)
    API_BASE_URL: str = "http://10.11.73.214:3001"
    API_TIMEOUT: float = 30.0
    
    # Local session storage
    SESSION_STORE_PATH: str = ".parkit/storage.json"
    SESSION_KEY: str = "user"
    
    # Redis collection cache
    REDIS_URL: str = "redis://localhost:6379/0"
    ENABLE_COLLECTION_CACHE: bool = False
    CACHE_TTL_SECONDS: int = 60
    
    # Checkout placeholder fare (not a computed fare)
    DEFAULT_CURRENCY: str = "USD"
    CHECKOUT_PRICE: str = "5.00"
    CHECKOUT_BASE_FEE: str = "4.50"
    CHECKOUT_SERVICE_FEE: str = "0.50"
    
    # Fallback artwork
    PLACEHOLDER_IMAGE_URL: str = "https://via.placeholder.com/120"
    PLACEHOLDER_AVATAR_URL: str = "https://via.placeholder.com/48"
    
    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    
    # Debug
    DEBUG: bool = False
    
    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached client settings.
    This function is cached to avoid reading .env file multiple times.
    """
    return Settings()


# Global settings instance
settings = get_settings()

"""
Configuration settings for CyberLawyerHub Backend
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "CyberLawyerHub Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    # Firebase Configuration
    FIREBASE_CREDENTIALS_PATH: str = "./firebase-credentials.json"
    # Support for raw JSON credentials (env var)
    FIREBASE_CREDENTIALS_JSON: str = ""
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_EMULATOR_HOST: str = ""
    DEV_MODE: bool = False

    # JWT Configuration (internally issued tokens; disabled while the key is empty)
    JWT_SECRET_KEY: str = ""
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:8080"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated origins to list"""
        origins = [origin.strip()
                   for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        if self.DEBUG:
            for port in [3000, 5173, 8080]:
                for host in ("localhost", "127.0.0.1"):
                    origin = f"http://{host}:{port}"
                    if origin not in origins:
                        origins.append(origin)
        return origins

    # Payment Settings
    STRIPE_SECRET_KEY: str = ""
    BOOKING_CURRENCY: str = "inr"
    PLATFORM_FEE_PERCENT: int = 25

    # Used for Stripe redirect URLs when the request carries no Origin header
    FRONTEND_URL: str = "http://localhost:5173"

    model_config = {"env_file": ".env",
                    "case_sensitive": True, "extra": "allow"}


# Global settings instance
settings = Settings()

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    BCRYPT_ROUNDS: int = 10

    AUTH_COOKIE_NAME: str = "token"
    AUTH_COOKIE_SECURE: bool = False
    # Re-read the account on every authenticated request so blocked or
    # deleted accounts lose access before their token expires
    ENFORCE_ACCOUNT_STATUS: bool = False

    CORS_ORIGINS: str = "*"

    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "properties"
    MAX_UPLOAD_SIZE_MB: int = 10

    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origin_list(self) -> list[str]:
        """Allowed CORS origins from the comma-separated env value"""
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


settings = Settings()

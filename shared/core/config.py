import os
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 1440  # 24 hours default

    # WildApricot (membership provider used for delegated login)
    WILDAPRICOT_ACCOUNT_ID: str = ""
    WILDAPRICOT_CLIENT_ID: str = ""
    WILDAPRICOT_CLIENT_SECRET: str = ""
    WILDAPRICOT_AUTHORIZE_URL: str = "https://www.waukeshamakers.com/sys/login/OAuthLogin"
    WILDAPRICOT_TOKEN_URL: str = "https://oauth.wildapricot.org/auth/token"
    WILDAPRICOT_API_BASE_URL: str = "https://api.wildapricot.org/v2.2"
    WILDAPRICOT_SCOPE: str = "contacts_me"
    WILDAPRICOT_TIMEOUT_SECONDS: int = 10

    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Legacy behaviour only rewrites direct children on rename/move
    LOCATION_RECURSIVE_CASCADE: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

# employee_tracker/config.py
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Either a full URL, or the DB_* parts below are assembled into one.
    DATABASE_URL: Optional[str] = None

    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_NAME: str = Field("employee_tracker")
    DB_USER: str = Field("postgres")
    DB_PASSWORD: str = Field("")

    HOST: str = Field("0.0.0.0")
    PORT: int = Field(8080)
    LOG_LEVEL: str = Field("info")
    SQL_ECHO: bool = Field(False)

    # Directory holding the front-end (index.html and assets)
    STATIC_DIR: str = Field("public")

    # Comma-separated origins; "*" allows any
    CORS_ORIGINS: str = Field("*")

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def effective_database_url(self) -> str:
        url = self.DATABASE_URL
        if not url:
            auth = self.DB_USER
            if self.DB_PASSWORD:
                auth = f"{self.DB_USER}:{quote_plus(self.DB_PASSWORD)}"
            url = f"postgresql://{auth}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

        # Ensure asyncpg is used
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]


settings = Settings()

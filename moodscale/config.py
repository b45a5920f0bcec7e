import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "moodscale"
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def spotify_enabled(self) -> bool:
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            spotify_client_id=os.getenv("SPOTIFY_CLIENT_ID"),
            spotify_client_secret=os.getenv("SPOTIFY_CLIENT_SECRET"),
            mongo_uri=os.getenv("MONGO_URI") or os.getenv("MONGODB_URI") or "mongodb://localhost:27017",
            db_name=os.getenv("DB_NAME", "moodscale"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT") or 5000),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache
def load_settings() -> Settings:
    return Settings.from_env()

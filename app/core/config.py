
from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = "Courtside"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Supabase Local
    LOCAL_SUPABASE_URL: str | None = None
    LOCAL_SUPABASE_KEY: str | None = None

    # Supabase Remote
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    # Ratings
    LEADERBOARD_LIMIT: int = 50
    RECENT_MATCHES_LIMIT: int = 20

    @property
    def supabase_url(self) -> str | None:
        # Try LOCAL_ first (for local development), then fallback to remote
        return self.LOCAL_SUPABASE_URL or self.SUPABASE_URL

    @property
    def supabase_key(self) -> str | None:
        return self.LOCAL_SUPABASE_KEY or self.SUPABASE_ANON_KEY or self.SUPABASE_KEY

    model_config = ConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore",
    )

settings = Settings()

"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "kunci-rahasia-default-untuk-lokal"


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET      # HMAC secret for session tokens
    jwt_expiry_seconds: int = 3600            # 1 hour
    bcrypt_rounds: int = 10                   # bcrypt work factor

    # ── Data files ───────────────────────────────────────────────────────
    users_db_path: str = "./users.json"
    stories_db_path: str = "./stories.json"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


config = Settings()

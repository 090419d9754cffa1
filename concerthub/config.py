from __future__ import annotations
import os
from dataclasses import dataclass


# ----------------------------
# Config & Constants
# ----------------------------
DEV_JWT_SECRET = "dev-jwt-secret-change-me-in-production"
TOKEN_TTL_SECONDS = 24 * 60 * 60


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in (
        "1", "true", "yes", "on"
    )


@dataclass(frozen=True)
class Settings:
    """Built once at startup and handed to the app factory."""
    database_url: str = "sqlite:///./concerthub.db"
    jwt_secret: str = DEV_JWT_SECRET
    token_ttl_seconds: int = TOKEN_TTL_SECONDS
    host: str = "0.0.0.0"
    port: int = 3000
    admin_username: str = "admin"
    admin_password: str = "admin123"
    seed_concerts: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.environ.get(
                "DATABASE_URL", "sqlite:///./concerthub.db"
            ),
            jwt_secret=os.environ.get("JWT_SECRET", DEV_JWT_SECRET),
            token_ttl_seconds=int(
                os.environ.get("TOKEN_TTL_SECONDS", str(TOKEN_TTL_SECONDS))
            ),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "3000")),
            admin_username=os.environ.get("ADMIN_USERNAME", "admin"),
            admin_password=os.environ.get("ADMIN_PASSWORD", "admin123"),
            seed_concerts=_env_flag("SEED_CONCERTS", "1"),
        )

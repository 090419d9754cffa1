"""
Admin authentication.

Passwords are bcrypt hashes; sessions are stateless HS256 JWTs carrying
{id, username, role}. Nothing about a login is kept server side, so a token
is valid exactly as long as its signature checks out and it has not expired.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .errors import Unauthenticated, Forbidden, Unauthorized
from .model.db import User


JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10


@dataclass(frozen=True)
class Principal:
    id: int
    username: str
    role: str

    def public(self) -> Dict[str, Any]:
        return {"id": self.id, "username": self.username, "role": self.role}


# --------------- Password hashing -----------------------------------------

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # malformed hash, or a password bcrypt refuses (> 72 bytes)
        return False


# --------------- Tokens ---------------------------------------------------

def issue_token(principal: Principal, settings: Settings,
                now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    claims = {
        **principal.public(),
        "iat": now,
        "exp": now + timedelta(seconds=settings.token_ttl_seconds),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> Principal:
    try:
        claims = jwt.decode(
            token, settings.jwt_secret, algorithms=[JWT_ALGORITHM]
        )
        return Principal(
            id=claims["id"], username=claims["username"], role=claims["role"]
        )
    except (jwt.InvalidTokenError, KeyError) as e:
        raise Forbidden() from e


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    # "Bearer <token>": the scheme word itself is not checked
    if not authorization:
        return None
    parts = authorization.split()
    return parts[1] if len(parts) > 1 else None


def authenticate(authorization: Optional[str], settings: Settings) -> Principal:
    token = bearer_token(authorization)
    if not token:
        raise Unauthenticated()
    return decode_token(token, settings)


# --------------- High-level flows -----------------------------------------

async def login(db: AsyncSession, settings: Settings,
                username: Optional[str], password: Optional[str]) -> dict:
    if not isinstance(username, str) or not isinstance(password, str):
        raise Unauthorized()

    result = await db.execute(
        text("SELECT id, username, password_hash, role "
             "FROM users WHERE username = :username"),
        {"username": username},
    )
    user = result.mappings().first()
    if not user:
        raise Unauthorized()

    ok = await run_in_threadpool(
        verify_password, password, user["password_hash"]
    )
    if not ok:
        raise Unauthorized()

    principal = Principal(
        id=user["id"], username=user["username"], role=user["role"]
    )
    return {
        "token": issue_token(principal, settings),
        "user": principal.public(),
    }


async def ensure_admin(db: AsyncSession, settings: Settings) -> bool:
    """Create the seed admin unless a user with that name already exists."""
    async with db.begin():
        result = await db.execute(
            text("SELECT id FROM users WHERE username = :username"),
            {"username": settings.admin_username},
        )
        if result.first() is not None:
            return False
        password_hash = await run_in_threadpool(
            hash_password, settings.admin_password
        )
        db.add(User(
            username=settings.admin_username,
            password_hash=password_hash,
            role="admin",
        ))
    print(f'✅ Default admin user created ({settings.admin_username})')
    return True

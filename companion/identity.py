"""
Identity providers: turn an incoming request into a verified user id.

The rest of the application only needs the resulting ``VerifiedIdentity``;
which provider is used is decided once at startup by ``build_identity``.
"""

import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from companion.config import (
    IDENTITY_MODE,
    SUPABASE_JWT_SECRET,
    TOKEN_AUDIENCE,
    TOKEN_EXPIRY_HOURS,
    get_env,
    is_development,
)
from companion.errors import AuthenticationError, InvalidRequest

USER_ID_HEADER = "x-user-id"


@dataclass
class VerifiedIdentity:
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        if self.email:
            return self.email.split("@")[0]
        return "User"


class HeaderIdentity:
    """
    Trusts the caller-supplied ``x-user-id`` header.

    Anyone can claim any id with this provider; use ``SupabaseTokenIdentity``
    wherever the API is reachable by untrusted clients.
    """
    name = "header"

    def identify(self, request) -> VerifiedIdentity:
        user_id = request.headers.get(USER_ID_HEADER)
        if not user_id or not user_id.strip():
            raise InvalidRequest("Missing x-user-id header")
        return VerifiedIdentity(user_id=user_id)


class SupabaseTokenIdentity:
    """Verifies HS256 Supabase access tokens sent as ``Authorization: Bearer``."""
    name = "jwt"

    def __init__(self, secret: str, audience: str = TOKEN_AUDIENCE):
        self.secret = secret
        self.audience = audience

    def identify(self, request) -> VerifiedIdentity:
        auth_header = request.headers.get("Authorization", "")
        if not auth_header:
            raise AuthenticationError("Authentication token is missing")

        parts = auth_header.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
            raise AuthenticationError("Invalid authorization header format")

        return self.verify(parts[1])

    def verify(self, token: str) -> VerifiedIdentity:
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=["HS256"], audience=self.audience,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Token has no subject")

        metadata = payload.get("user_metadata") or {}
        return VerifiedIdentity(
            user_id=str(user_id),
            email=payload.get("email"),
            full_name=metadata.get("full_name") or metadata.get("name"),
        )


class MockIdentity:
    """
    Test double: every request is the mock developer user.

    Only for local UI work; ``build_identity`` refuses it outside development.
    """
    name = "mock"

    def __init__(self, user_id: str = "mock-user-id",
                 email: str = "dev@spjimr.org", full_name: str = "Mock Developer"):
        self.identity = VerifiedIdentity(user_id=user_id, email=email, full_name=full_name)

    def identify(self, request) -> VerifiedIdentity:
        return self.identity


def issue_token(user_id: str, secret: str = SUPABASE_JWT_SECRET,
                email: Optional[str] = None, full_name: Optional[str] = None,
                expires_in: timedelta = timedelta(hours=TOKEN_EXPIRY_HOURS)) -> str:
    """Mint a token shaped like a Supabase access token."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "aud": TOKEN_AUDIENCE,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
        "user_metadata": {"full_name": full_name} if full_name else {},
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def build_identity(mode: str = IDENTITY_MODE):
    """Return the identity provider configured by *mode*."""
    if mode == "header":
        return HeaderIdentity()
    if mode == "jwt":
        return SupabaseTokenIdentity(get_env("SUPABASE_JWT_SECRET"))
    if mode == "mock":
        if not is_development():
            print("ERROR: IDENTITY_MODE=mock requires FLASK_ENV=development", file=sys.stderr)
            sys.exit(1)
        print("[init] WARNING: mock identity in use, every request is the mock user")
        return MockIdentity()

    print(f"ERROR: unknown IDENTITY_MODE '{mode}'", file=sys.stderr)
    sys.exit(1)

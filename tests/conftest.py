"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path
from uuid import uuid4

# Disable rate limiting and external backends in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = ""
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWKSCache, JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def test_user() -> TokenUser:
    """A token user with a fresh ID."""
    return TokenUser(
        id=uuid4(),
        email="test@example.com",
        full_name="Test User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """HS256 auth provider with no JWKS endpoint."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
        jwks=JWKSCache(None),
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Signed access token for the test user."""
    return auth_provider.create_token(test_user)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}

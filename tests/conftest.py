"""
Pytest configuration and fixtures for ScopeBridge tests.
"""

import pytest

from scopebridge.auth.token import Token
from scopebridge.utils.config import Config, reset_config

APP_ID = "xsapp!t0"


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return Config(
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset global configuration after each test."""
    yield
    reset_config()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ScopeBridge and service binding variables from the environment."""
    import os

    for key in list(os.environ):
        if key.startswith("SCOPEBRIDGE_") or key == "VCAP_SERVICES":
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def app_id():
    return APP_ID


@pytest.fixture
def sample_claims():
    """Claims of a verified user token."""
    return {
        "sub": "user-123",
        "user_name": "jane.doe",
        "email": "jane.doe@example.com",
        "cid": "sb-xsapp!t0",
        "grant_type": "authorization_code",
        "zid": "zone-1",
        "iss": "https://tenant.auth.example.com/oauth/token",
        "aud": ["xsapp!t0", "openid"],
        "exp": 1893456000,
        "iat": 1893452400,
        "scope": ["xsapp!t0.Read", "xsapp!t0.Write", "other!t1.Admin"],
    }


@pytest.fixture
def sample_token(sample_claims):
    return Token(sample_claims)


@pytest.fixture
def client_credentials_token():
    return Token({
        "sub": "sb-xsapp!t0",
        "cid": "sb-xsapp!t0",
        "grant_type": "client_credentials",
        "scope": ["xsapp!t0.Callback", "uaa.resource"],
    })


@pytest.fixture
def vcap_services():
    """VCAP_SERVICES document with a single xsuaa binding."""
    return {
        "xsuaa": [
            {
                "name": "xsapp-uaa",
                "label": "xsuaa",
                "credentials": {
                    "xsappname": APP_ID,
                    "url": "https://tenant.auth.example.com",
                    "clientid": "sb-xsapp!t0",
                    "clientsecret": "s3cr3t",
                    "uaadomain": "auth.example.com",
                },
            }
        ]
    }

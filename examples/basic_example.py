#!/usr/bin/env python3
"""
Basic example of using ScopeBridge.

This example demonstrates:
1. Converting a verified token into a principal with global authorities
2. Switching the converter to local scopes
3. Building a client-credentials token request from a service binding
"""

from scopebridge import ServiceConfiguration, Token, TokenAuthenticationConverter, TokenType
from scopebridge.utils.config import Config
from scopebridge.utils.logging import setup_logging

VCAP_SERVICES = {
    "xsuaa": [
        {
            "name": "bookshop-uaa",
            "credentials": {
                "xsappname": "bookshop!t42",
                "url": "https://tenant.auth.example.com",
                "clientid": "sb-bookshop!t42",
                "clientsecret": "change-me",
            },
        }
    ]
}


def main():
    setup_logging(Config(log_level="INFO", log_format="text"))

    config = ServiceConfiguration.from_vcap_services(VCAP_SERVICES)

    # Claims as handed over by the JWT verification layer
    token = Token({
        "sub": "42",
        "user_name": "jane.doe",
        "scope": ["bookshop!t42.Read", "bookshop!t42.Order", "openid"],
    })

    converter = TokenAuthenticationConverter.from_configuration(config)
    principal = converter.convert(token)
    print(f"Global authorities of {principal.name}: {list(principal.authorities)}")

    converter.set_local_scope_as_authorities(True)
    principal = converter.convert(token)
    print(f"Local authorities of {principal.name}: {list(principal.authorities)}")
    print(f"May order: {principal.has_authority('Order')}")

    request = config.create_token_request(TokenType.CLIENT_CREDENTIALS_TOKEN)
    print(f"Token request: {request!r}")
    print(f"Endpoint: {request.resolve_token_endpoint()} (valid: {request.is_valid()})")


if __name__ == "__main__":
    main()

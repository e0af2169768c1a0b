"""
Authorization server service configuration for ScopeBridge.

This module provides the configuration describing the application's binding
to the authorization server (application id, URL, client credentials) and
factory functions that set up converters and token requests from it.
Configuration can be read from environment variables, from a Cloud Foundry
style ``VCAP_SERVICES`` document, or created programmatically.
"""

import json
import os
from typing import Any, Dict, Mapping, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .converter import TokenAuthenticationConverter
from .exceptions import ConfigurationError
from .token_request import TokenExchangeRequest, TokenType, is_absolute_http_uri

logger = structlog.get_logger(__name__)

XSUAA_SERVICE_LABEL = "xsuaa"


class ServiceConfiguration(BaseModel):
    """
    Binding of the application to its authorization server.
    """

    model_config = ConfigDict(frozen=True)

    app_id: Optional[str] = Field(default=None, description="Application id (xsappname), e.g. my-app!t123")
    url: Optional[str] = Field(default=None, description="Authorization server base URL")
    client_id: Optional[str] = Field(default=None, max_length=255, description="OAuth client id")
    client_secret: Optional[str] = Field(default=None, description="OAuth client secret", repr=False)
    uaa_domain: Optional[str] = Field(default=None, description="Authorization server domain")
    local_scopes_as_authorities: bool = Field(default=False, description="Strip the app id from scopes and drop foreign scopes")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_absolute_http_uri(value):
            raise ValueError("url must be an absolute http(s) URI")
        return value

    @classmethod
    def create(cls, **values: Any) -> "ServiceConfiguration":
        """
        Create configuration, reporting invalid values as ConfigurationError.

        Returns:
            ServiceConfiguration instance
        """
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid service configuration: {e}",
                details={"errors": e.errors(include_url=False)}
            ) from e

    @classmethod
    def from_env(cls, prefix: str = "SCOPEBRIDGE_XSUAA_") -> "ServiceConfiguration":
        """
        Create configuration from environment variables.

        Args:
            prefix: Environment variable prefix

        Returns:
            ServiceConfiguration instance
        """
        config_dict: Dict[str, Any] = {}

        env_mapping = {
            "APP_ID": "app_id",
            "URL": "url",
            "CLIENT_ID": "client_id",
            "CLIENT_SECRET": "client_secret",
            "UAA_DOMAIN": "uaa_domain",
            "LOCAL_SCOPES_AS_AUTHORITIES": "local_scopes_as_authorities",
        }

        for env_key, config_key in env_mapping.items():
            value = os.getenv(f"{prefix}{env_key}")
            if value is None:
                continue
            if config_key == "local_scopes_as_authorities":
                config_dict[config_key] = value.lower() in ("true", "1", "yes", "on")
            else:
                config_dict[config_key] = value

        return cls.create(**config_dict)

    @classmethod
    def from_vcap_services(
        cls,
        vcap_services: Optional[Union[str, Mapping[str, Any]]] = None,
        service_name: Optional[str] = None,
        **overrides: Any,
    ) -> "ServiceConfiguration":
        """
        Create configuration from a Cloud Foundry service binding.

        Args:
            vcap_services: VCAP_SERVICES JSON document or its parsed form;
                read from the environment when None
            service_name: Name of the bound service instance, if more than
                one instance is bound
            **overrides: Values taking precedence over the binding,
                e.g. local_scopes_as_authorities=True

        Returns:
            ServiceConfiguration instance

        Raises:
            ConfigurationError: If the document is missing, malformed, or holds
                no matching binding
        """
        if vcap_services is None:
            vcap_services = os.getenv("VCAP_SERVICES")
            if vcap_services is None:
                raise ConfigurationError("VCAP_SERVICES is not set")

        if isinstance(vcap_services, str):
            try:
                vcap_services = json.loads(vcap_services)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"VCAP_SERVICES is not valid JSON: {e}") from e

        if not isinstance(vcap_services, Mapping):
            raise ConfigurationError("VCAP_SERVICES must be a JSON object")

        credentials = _find_binding_credentials(vcap_services, service_name)
        values = {
            "app_id": credentials.get("xsappname"),
            "url": credentials.get("url"),
            "client_id": credentials.get("clientid"),
            "client_secret": credentials.get("clientsecret"),
            "uaa_domain": credentials.get("uaadomain"),
        }
        values.update(overrides)

        logger.info("Loaded service binding", app_id=values["app_id"], service_name=service_name)
        return cls.create(**values)

    def get_app_id(self) -> Optional[str]:
        return self.app_id

    def get_url(self) -> Optional[str]:
        return self.url

    def create_token_request(self, token_type: Optional[TokenType] = None) -> TokenExchangeRequest:
        """
        Create a token request pre-filled with this binding's client.

        Args:
            token_type: Requested token type

        Returns:
            TokenExchangeRequest rooted at the configured URL
        """
        return (
            TokenExchangeRequest(base_uri=self.url)
            .set_client_id(self.client_id)
            .set_client_secret(self.client_secret)
            .set_token_type(token_type)
        )


def _find_binding_credentials(
    vcap_services: Mapping[str, Any],
    service_name: Optional[str],
) -> Mapping[str, Any]:
    bindings = vcap_services.get(XSUAA_SERVICE_LABEL) or []
    if not isinstance(bindings, list):
        raise ConfigurationError(f"'{XSUAA_SERVICE_LABEL}' entry of VCAP_SERVICES must be a list")

    if service_name is not None:
        bindings = [b for b in bindings if isinstance(b, Mapping) and b.get("name") == service_name]

    if not bindings:
        raise ConfigurationError(
            f"No '{XSUAA_SERVICE_LABEL}' service binding found",
            details={"service_name": service_name}
        )
    if len(bindings) > 1:
        raise ConfigurationError(
            f"Found {len(bindings)} '{XSUAA_SERVICE_LABEL}' service bindings, pass service_name",
            details={"names": [b.get("name") for b in bindings if isinstance(b, Mapping)]}
        )

    binding = bindings[0]
    credentials = binding.get("credentials") if isinstance(binding, Mapping) else None
    if not isinstance(credentials, Mapping):
        raise ConfigurationError("Service binding has no credentials")
    return credentials


def load_service_configuration() -> ServiceConfiguration:
    """
    Load service configuration, preferring a VCAP_SERVICES binding over
    SCOPEBRIDGE_XSUAA_* environment variables.

    Returns:
        ServiceConfiguration instance
    """
    if os.getenv("VCAP_SERVICES"):
        return ServiceConfiguration.from_vcap_services()
    return ServiceConfiguration.from_env()


def create_authentication_converter(
    service_config: Optional[ServiceConfiguration] = None
) -> TokenAuthenticationConverter:
    """
    Create a token authentication converter from configuration.

    Args:
        service_config: Service configuration (loads from env if None)

    Returns:
        Converter using local extraction when the configuration asks for it

    Raises:
        PreconditionError: If local extraction is configured without an app id
    """
    if service_config is None:
        service_config = load_service_configuration()

    converter = TokenAuthenticationConverter.from_configuration(service_config)
    if service_config.local_scopes_as_authorities:
        converter.set_local_scope_as_authorities(True)

    logger.info(
        "Created token authentication converter",
        app_id=service_config.app_id,
        local_scopes_only=converter.local_scopes_only,
    )
    return converter

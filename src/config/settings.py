"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Backend environment variables:
        - CATALOG_SERVICE_ENDPOINT: Catalog Service GraphQL endpoint
        - LIVE_SEARCH_ENDPOINT: Live Search GraphQL endpoint (defaults to the catalog endpoint)
        - CATALOG_API_KEY: API key sent to the Catalog Service
        - COMMERCE_ENVIRONMENT_ID / COMMERCE_WEBSITE_CODE / COMMERCE_STORE_CODE /
          COMMERCE_STORE_VIEW_CODE / COMMERCE_CUSTOMER_GROUP: storefront scope headers

    Optional environment variables:
        - HOST: Server host (default: 0.0.0.0)
        - PORT: Server port (default: 8080)
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Commerce Backends
    # ==========================================================================
    catalog_service_endpoint: str = Field(
        default="https://catalog-service-sandbox.adobe.io/graphql",
        description="Catalog Service GraphQL endpoint"
    )
    live_search_endpoint: Optional[str] = Field(
        default=None,
        description="Live Search GraphQL endpoint (falls back to the catalog endpoint)"
    )
    catalog_api_key: str = Field(default="", description="X-Api-Key sent to the Catalog Service")
    live_search_api_key: str = Field(default="search_gql", description="X-Api-Key sent to Live Search")

    commerce_environment_id: str = Field(default="", description="Magento-Environment-Id header")
    commerce_website_code: str = Field(default="base", description="Magento-Website-Code header")
    commerce_store_code: str = Field(default="main_website_store", description="Magento-Store-Code header")
    commerce_store_view_code: str = Field(default="default", description="Magento-Store-View-Code header")
    commerce_customer_group: str = Field(default="", description="Magento-Customer-Group header")

    request_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for a single backend call"
    )

    @property
    def resolved_live_search_endpoint(self) -> str:
        return self.live_search_endpoint or self.catalog_service_endpoint

    def scope_headers(self) -> Dict[str, str]:
        """Storefront scope headers shared by both backends (empty values omitted)."""
        headers = {
            "Magento-Environment-Id": self.commerce_environment_id,
            "Magento-Website-Code": self.commerce_website_code,
            "Magento-Store-Code": self.commerce_store_code,
            "Magento-Store-View-Code": self.commerce_store_view_code,
            "Magento-Customer-Group": self.commerce_customer_group,
        }
        return {name: value for name, value in headers.items() if value}

    # ==========================================================================
    # Search Behaviour
    # ==========================================================================
    default_page_size: int = Field(default=24, ge=1, description="Page size when none is requested")
    suggestions_limit: int = Field(default=5, ge=1, description="Max autocomplete suggestions")
    suggestions_min_length: int = Field(default=2, ge=1, description="Shortest phrase that triggers suggestions")
    log_message_limit: int = Field(default=60, ge=1, description="Max characters of an error message in logs")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "catalog_service_endpoint": "https://catalog.test/graphql",
        "catalog_api_key": "test-key",
        "commerce_environment_id": "test-env",
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)

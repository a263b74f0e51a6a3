from functools import lru_cache

from fastapi import Depends

from senda.core.config import GeocodingClientConfig, settings
from senda.services.address_resolution import AddressResolver, build_address_resolver
from senda.services.gemini_service import GeminiClient


@lru_cache
def get_client_config() -> GeocodingClientConfig:
    """Build the external-client configuration once from process settings."""
    return GeocodingClientConfig.from_settings(settings)


def get_address_resolver(
    config: GeocodingClientConfig = Depends(get_client_config),
) -> AddressResolver:
    """
    Address resolver dependency.

    Usage:
        @router.post("/resolve")
        async def resolve(resolver: AddressResolver = Depends(get_address_resolver)):
            ...
    """
    return build_address_resolver(config)


def get_gemini_client(
    config: GeocodingClientConfig = Depends(get_client_config),
) -> GeminiClient:
    return GeminiClient(config)

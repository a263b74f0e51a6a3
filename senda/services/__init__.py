"""
Senda Services Module.

Services:
    - AddressResolver: geocoding fallback ladder for institution addresses
    - NominatimLookup: OpenStreetMap Nominatim search client
    - GeminiClient: Google Gemini REST client and assistant helpers
"""

from .address_resolution import AddressResolver, build_address_resolver
from .gemini_service import GeminiAddressNormalizer, GeminiClient
from .geocoding_service import NominatimLookup

__all__ = [
    "AddressResolver",
    "build_address_resolver",
    "GeminiAddressNormalizer",
    "GeminiClient",
    "NominatimLookup",
]

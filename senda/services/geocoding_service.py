from __future__ import annotations

import logging
from typing import List, Protocol

import requests

from senda.core.config import GeocodingClientConfig
from senda.core.errors import LookupTransportError
from senda.schemas.geocode import LookupCandidate

logger = logging.getLogger(__name__)


class LookupService(Protocol):
    """Text query in, candidate matches out. Empty list means no match."""

    def search(self, query: str) -> List[LookupCandidate]:
        ...


class NominatimLookup:
    """Forward geocoding via Nominatim.

    Nominatim's usage policy requires an identifying User-Agent on every
    request; no API key is involved.
    """

    def __init__(self, config: GeocodingClientConfig):
        self.base_url = config.lookup_service_base_url
        self.user_agent = config.lookup_user_agent
        self.email = config.lookup_email
        self.country = config.lookup_country
        self.timeout = config.lookup_timeout
        self.limit = config.lookup_limit

    def search(self, query: str) -> List[LookupCandidate]:
        """Return candidates for ``query`` in provider order.

        Raises ``LookupTransportError`` when the provider cannot be reached.
        Non-success statuses and unusable payloads are reported as no match.
        """
        if not query or not query.strip():
            return []

        params = {
            "q": query,
            "format": "json",
            "limit": self.limit,
        }

        if self.country:
            params["countrycodes"] = self.country
        if self.email:
            params["email"] = self.email

        headers = {"User-Agent": self.user_agent}

        try:
            response = requests.get(
                self.base_url, params=params, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise LookupTransportError(f"geocoding request failed: {exc}") from exc

        if not response.ok:
            logger.info(
                "geocoding returned HTTP %s for query %r", response.status_code, query
            )
            return []

        try:
            data = response.json()
        except ValueError:
            logger.warning("geocoding response is not valid json")
            return []

        if not isinstance(data, list):
            return []

        candidates: List[LookupCandidate] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                lat = float(item.get("lat"))
                lon = float(item.get("lon"))
            except (TypeError, ValueError):
                continue
            candidates.append(
                LookupCandidate(
                    lat=lat,
                    lon=lon,
                    display_name=item.get("display_name") or query,
                )
            )
        return candidates

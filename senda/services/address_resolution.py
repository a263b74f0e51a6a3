"""
Address resolution for institution registrations.

Turns a structured, possibly noisy Argentine postal address into coordinates
by walking a fixed ladder of Nominatim queries, from the most precise (street,
number and postal code) to the city centroid. An AI normalization step sits
between the deterministic street queries and the city fallback.

Each strategy issues exactly one lookup call and runs only after the previous
one finished. Transport failures of a single lookup are logged and treated as
"no match"; exhausting the ladder returns ``None``.
"""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from senda.core.config import GeocodingClientConfig
from senda.core.errors import AssistantResponseError, LookupTransportError
from senda.schemas.geocode import AddressQuery, Coordinates
from senda.services.gemini_service import (
    AddressNormalizer,
    GeminiAddressNormalizer,
    GeminiClient,
)
from senda.services.geocoding_service import LookupService, NominatimLookup

logger = logging.getLogger(__name__)

COUNTRY_SUFFIX = "Argentina"
NO_NUMBER_MARKERS = ("s/n", "sin num")

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class Found:
    coordinates: Coordinates


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class TransportError:
    detail: str


LookupOutcome = Union[Found, NotFound, TransportError]


@dataclass(frozen=True)
class Strategy:
    name: str
    query: str


def sanitize_street_number(value: Optional[str]) -> str:
    """'1234-A' -> '1234'; 'S/N', 'Sin número' -> ''."""
    if not value:
        return ""
    lowered = value.lower()
    if any(marker in lowered for marker in NO_NUMBER_MARKERS):
        return ""
    return _NON_DIGITS.sub("", value)


def clean_postal_code(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_street_strategies(address: AddressQuery) -> List[Strategy]:
    """Deterministic street-level queries (ladder steps 1-4) in ladder order.

    Steps whose precondition is not met are left out, so no lookup call is
    ever issued for them.
    """
    street = address.street_name.strip()
    city = address.city.strip()
    province = address.province.strip()
    number = sanitize_street_number(address.street_number)
    postal_code = clean_postal_code(address.postal_code)

    strategies: List[Strategy] = []
    if postal_code and number:
        strategies.append(
            Strategy(
                "number_and_postal_code",
                f"{street} {number}, {city}, {province} {postal_code}, {COUNTRY_SUFFIX}",
            )
        )
    if number:
        strategies.append(
            Strategy(
                "number",
                f"{street} {number}, {city}, {province}, {COUNTRY_SUFFIX}",
            )
        )
    if postal_code:
        strategies.append(
            Strategy(
                "street_and_postal_code",
                f"{street}, {city}, {province} {postal_code}, {COUNTRY_SUFFIX}",
            )
        )
    strategies.append(
        Strategy("street", f"{street}, {city}, {province}, {COUNTRY_SUFFIX}")
    )
    return strategies


def build_city_strategy(address: AddressQuery) -> Strategy:
    return Strategy(
        "city",
        f"{address.city.strip()}, {address.province.strip()}, {COUNTRY_SUFFIX}",
    )


class AddressResolver:
    """Resolves addresses to coordinates; holds no per-call state."""

    def __init__(
        self,
        lookup: LookupService,
        normalizer: Optional[AddressNormalizer] = None,
    ):
        self.lookup = lookup
        self.normalizer = normalizer

    async def resolve(
        self,
        street_name: str,
        street_number: Optional[str],
        city: str,
        province: str,
        postal_code: Optional[str] = None,
    ) -> Optional[Coordinates]:
        return await self.resolve_query(
            AddressQuery(
                street_name=street_name,
                street_number=street_number,
                city=city,
                province=province,
                postal_code=postal_code,
            )
        )

    async def resolve_query(self, address: AddressQuery) -> Optional[Coordinates]:
        for strategy in build_street_strategies(address):
            coordinates = await self._attempt(strategy)
            if coordinates is not None:
                return coordinates

        logger.info("Traditional geocoding failed, trying AI interpretation")
        normalized = await self._normalize(address)
        if normalized:
            coordinates = await self._attempt(Strategy("ai_normalized", normalized))
            if coordinates is not None:
                return coordinates

        coordinates = await self._attempt(build_city_strategy(address))
        if coordinates is not None:
            return coordinates

        logger.info("Address could not be resolved: %s", address.city)
        return None

    async def _attempt(self, strategy: Strategy) -> Optional[Coordinates]:
        outcome = await self.lookup_query(strategy.query)
        if isinstance(outcome, Found):
            logger.debug("Geocoding strategy %s matched", strategy.name)
            return outcome.coordinates
        if isinstance(outcome, TransportError):
            logger.warning(
                "Geocoding strategy %s failed at transport level: %s",
                strategy.name,
                outcome.detail,
            )
        return None

    async def lookup_query(self, query: str) -> LookupOutcome:
        """Run one lookup and classify it; only transport faults are caught."""
        try:
            candidates = await asyncio.to_thread(self.lookup.search, query)
        except LookupTransportError as exc:
            return TransportError(detail=str(exc))

        if not candidates:
            return NotFound()
        return Found(coordinates=candidates[0].to_coordinates())

    async def _normalize(self, address: AddressQuery) -> Optional[str]:
        if self.normalizer is None:
            return None
        try:
            return await asyncio.to_thread(self.normalizer.normalize, address)
        except AssistantResponseError as exc:
            logger.warning("AI address normalization failed: %s", exc)
            return None


def build_address_resolver(config: GeocodingClientConfig) -> AddressResolver:
    return AddressResolver(
        lookup=NominatimLookup(config),
        normalizer=GeminiAddressNormalizer(GeminiClient(config)),
    )

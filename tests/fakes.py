"""Test doubles for the lookup service and the AI address normalizer."""
from typing import Dict, List, Optional, Union

from senda.schemas.geocode import AddressQuery, LookupCandidate


class FakeLookup:
    """Lookup service double; records every query in call order.

    ``responses`` maps a query to candidates or to an exception instance that
    is raised for that query. Unknown queries return no match.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Union[List[LookupCandidate], Exception]]] = None,
    ):
        self.responses = responses or {}
        self.queries: List[str] = []

    def search(self, query: str) -> List[LookupCandidate]:
        self.queries.append(query)
        result = self.responses.get(query, [])
        if isinstance(result, Exception):
            raise result
        return result


class FakeNormalizer:
    def __init__(self, result: Optional[str] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: List[AddressQuery] = []

    def normalize(self, address: AddressQuery) -> Optional[str]:
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        return self.result


def candidate(lat: float, lon: float) -> List[LookupCandidate]:
    return [LookupCandidate(lat=lat, lon=lon, display_name="match")]

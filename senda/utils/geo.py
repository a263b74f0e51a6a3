from __future__ import annotations

import math
import re
import unicodedata
from typing import Dict, Iterable

EARTH_RADIUS_KM = 6371.0

# Last token is the house number: "1234", "1234B" or the "S/N" placeholder.
_TRAILING_NUMBER_RE = re.compile(r"^(.*?)\s+(\d+[a-zA-Z]?|S/N|s/n)$")


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def normalize_text(text: str) -> str:
    """Lowercase and strip accents for search matching ("Rosário" -> "rosario").

    Not used for geocoding queries, which keep the user's spelling.
    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def split_address(full_address: str) -> Dict[str, str]:
    if not full_address:
        return {"street": "", "number": ""}

    match = _TRAILING_NUMBER_RE.match(full_address.strip())
    if match:
        return {"street": match.group(1).strip(), "number": match.group(2).strip()}

    return {"street": full_address.strip(), "number": ""}


def matches_search(
    search: str, *fields: str, semantic_tags: Iterable[str] = ()
) -> bool:
    """Directory search predicate used by the map view.

    Matches when the normalized search text appears in the normalized content
    or when any AI-expanded tag does.
    """
    content = normalize_text(" ".join(field for field in fields if field))
    if normalize_text(search) in content:
        return True
    return any(normalize_text(tag) in content for tag in semantic_tags)

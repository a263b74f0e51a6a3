"""
Cliente del asistente IA (Google Gemini, API REST generateContent).

The assistant is used in four places:
- address normalization, as the last-resort step of the geocoding ladder
- registration screening for new institutions
- semantic keyword expansion for the map search box
- one-sentence impact summary for the admin dashboard

Every caller-facing helper degrades to a safe default instead of raising;
only ``GeminiClient.generate_text`` raises ``AssistantResponseError``.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional, Protocol

import requests

from senda.core.config import GeocodingClientConfig
from senda.core.errors import AssistantNoCandidatesError, AssistantResponseError
from senda.schemas.assistant import ImpactStats, RegistrationVerdict
from senda.schemas.geocode import AddressQuery

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*[ \t]*\r?\n|```", re.MULTILINE)

ADDRESS_PROMPT = (
    "Interpret this address and return a standardized, searchable address "
    "string for OpenStreetMap/Nominatim in Argentina.\n"
    'Input: Calle "{street}", Altura "{number}", Ciudad "{city}", '
    'Provincia "{province}", CP "{postal_code}".\n'
    "The address might contain errors, descriptive landmarks, or local names.\n"
    "Return ONLY the standardized address string. "
    'example: "Avenida Alem 1234, Santa Fe, Argentina".\n'
    "Do not use markdown."
)

REGISTRATION_PROMPT = (
    'Act as a gov auditor. Validate if this entity "{name}" matches the '
    'description "{description}" and looks like a valid social institution '
    "(NGO, community center, church, club, etc).\n"
    "Return ONLY a raw JSON object with:\n"
    '- "legitimo": boolean (true if it seems valid/social, false if it looks '
    "like spam, commercial, or unsafe)\n"
    '- "motivo": string (short explanation in Spanish).\n'
    "Do not use Markdown."
)

SEARCH_EXPANSION_PROMPT = (
    "Return a raw JSON string array of 5 semantic keywords related to this "
    'search term context (social help context): "{query}".\n'
    'Example: if query is "hambre", return ["comedor", "alimentos", '
    '"merendero", "nutrición", "viandas"].\n'
    "Do not use markdown."
)

IMPACT_PROMPT = (
    "Generate a 1-sentence specialized summary of social impact based on "
    "these stats for an executive dashboard:\n"
    "Total Institutions: {total_institutions}, Beneficiaries: "
    "{total_beneficiaries}, Active Request: {active_requests}.\n"
    "Tone: Professional, government-like, inspiring. Spanish language."
)

REGISTRATION_UNAVAILABLE_REASON = (
    "Validación técnica no disponible. Se requiere revisión manual estricta."
)
REGISTRATION_NO_ANSWER_REASON = (
    "Verificación IA no disponible, aprobado temporalmente."
)
REGISTRATION_DEFAULT_REASON = "Validado por IA"
IMPACT_FALLBACK_SUMMARY = (
    "Monitoreo de red activo. Datos actualizados en tiempo real."
)
IMPACT_NO_ANSWER_SUMMARY = (
    "Red activa y en crecimiento sosteniendo el tejido social."
)


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (``` or ```json) around an assistant reply.

    A language tag is only dropped when it ends the opening fence line, so a
    one-line reply like ```Avenida Alem 1234``` keeps its first word.
    """
    return _FENCE_RE.sub("", text).strip()


def parse_assistant_json(text: str) -> Any:
    """Parse the first JSON object or array found in an assistant reply.

    Models often wrap JSON in fences or add a sentence before it, so the
    payload is cut from the first opening brace/bracket to the matching last
    closing one before parsing.
    """
    cleaned = strip_code_fences(text)

    first_brace = cleaned.find("{")
    first_bracket = cleaned.find("[")

    start = end = -1
    if first_brace != -1 and (first_bracket == -1 or first_brace < first_bracket):
        start = first_brace
        end = cleaned.rfind("}")
    elif first_bracket != -1:
        start = first_bracket
        end = cleaned.rfind("]")

    if start != -1 and end != -1:
        cleaned = cleaned[start : end + 1]

    try:
        return json.loads(cleaned)
    except ValueError as exc:
        logger.error("Error parsing assistant JSON: %r", text)
        raise AssistantResponseError(
            "Formato de respuesta inválido por parte de la IA."
        ) from exc


class GeminiClient:
    """Thin wrapper over the Gemini ``generateContent`` REST endpoint."""

    def __init__(self, config: GeocodingClientConfig):
        self.endpoint = config.ai_assistant_endpoint
        self.api_key = config.ai_assistant_api_key
        self.timeout = config.ai_assistant_timeout

    def generate_text(self, prompt: str, extra_parts: Optional[List[dict]] = None) -> str:
        if not self.api_key:
            raise AssistantResponseError("GEMINI_API_KEY is not configured")

        parts: List[dict] = [{"text": prompt}]
        if extra_parts:
            parts.extend(extra_parts)

        try:
            response = requests.post(
                self.endpoint,
                params={"key": self.api_key},
                json={"contents": [{"parts": parts}]},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise AssistantResponseError(f"assistant request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise AssistantResponseError(
                f"assistant returned non-JSON body (HTTP {response.status_code})"
            ) from exc

        try:
            content = data["candidates"][0]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AssistantNoCandidatesError(
                f"assistant returned no candidates (HTTP {response.status_code})"
            ) from exc
        if not content:
            raise AssistantNoCandidatesError(
                f"assistant returned empty content (HTTP {response.status_code})"
            )

        try:
            text = content["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AssistantResponseError(
                f"assistant response missing content (HTTP {response.status_code})"
            ) from exc

        if not isinstance(text, str):
            raise AssistantResponseError("assistant response text is not a string")
        return text.strip()


class AddressNormalizer(Protocol):
    def normalize(self, address: AddressQuery) -> Optional[str]:
        ...


class GeminiAddressNormalizer:
    """Asks the assistant to rewrite a malformed address for Nominatim."""

    def __init__(self, client: GeminiClient):
        self.client = client

    def build_prompt(self, address: AddressQuery) -> str:
        return ADDRESS_PROMPT.format(
            street=address.street_name,
            number=address.street_number or "",
            city=address.city,
            province=address.province,
            postal_code=address.postal_code or "N/A",
        )

    def normalize(self, address: AddressQuery) -> Optional[str]:
        try:
            reply = self.client.generate_text(self.build_prompt(address))
        except AssistantResponseError as exc:
            logger.warning("AI address normalization failed: %s", exc)
            return None

        normalized = strip_code_fences(reply)
        return normalized or None


def validate_registration(
    client: GeminiClient,
    name: str,
    description: str,
    image_base64: Optional[str] = None,
) -> RegistrationVerdict:
    extra_parts = None
    if image_base64:
        extra_parts = [
            {"inline_data": {"mime_type": "image/jpeg", "data": image_base64}}
        ]

    try:
        reply = client.generate_text(
            REGISTRATION_PROMPT.format(name=name, description=description),
            extra_parts=extra_parts,
        )
        payload = parse_assistant_json(reply)
    except AssistantNoCandidatesError as exc:
        logger.warning("Assistant gave no verdict, allowing by default: %s", exc)
        return RegistrationVerdict(legitimate=True, reason=REGISTRATION_NO_ANSWER_REASON)
    except AssistantResponseError as exc:
        logger.error("Error validating registration with assistant: %s", exc)
        return RegistrationVerdict(
            legitimate=True, reason=REGISTRATION_UNAVAILABLE_REASON
        )

    if not isinstance(payload, dict):
        logger.warning("Registration verdict is not an object: %r", payload)
        return RegistrationVerdict(
            legitimate=True, reason=REGISTRATION_UNAVAILABLE_REASON
        )

    return RegistrationVerdict(
        legitimate=bool(payload.get("legitimo")),
        reason=str(payload.get("motivo") or REGISTRATION_DEFAULT_REASON),
    )


def expand_search_query(client: GeminiClient, query: str) -> List[str]:
    try:
        payload = parse_assistant_json(
            client.generate_text(SEARCH_EXPANSION_PROMPT.format(query=query))
        )
    except AssistantResponseError as exc:
        logger.info("Search expansion unavailable: %s", exc)
        return []

    if not isinstance(payload, list):
        return []
    return [str(item) for item in payload if isinstance(item, (str, int, float))]


def generate_impact_summary(client: GeminiClient, stats: ImpactStats) -> str:
    try:
        summary = client.generate_text(IMPACT_PROMPT.format(**stats.model_dump()))
    except AssistantNoCandidatesError:
        return IMPACT_NO_ANSWER_SUMMARY
    except AssistantResponseError as exc:
        logger.info("Impact summary unavailable: %s", exc)
        return IMPACT_FALLBACK_SUMMARY
    return summary or IMPACT_NO_ANSWER_SUMMARY

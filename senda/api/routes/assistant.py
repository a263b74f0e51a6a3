"""
AI assistant endpoints (Gemini).

All of them degrade gracefully: when the assistant is unavailable the
response carries a safe default instead of an error status.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from senda.api.deps import get_gemini_client
from senda.schemas.assistant import (
    ImpactStats,
    ImpactSummaryResponse,
    RegistrationValidationRequest,
    RegistrationVerdict,
    SearchExpansionRequest,
    SearchExpansionResponse,
)
from senda.services.gemini_service import (
    GeminiClient,
    expand_search_query,
    generate_impact_summary,
    validate_registration,
)

router = APIRouter()


@router.post(
    "/validate-registration",
    response_model=RegistrationVerdict,
    summary="Pre-screen a new institution registration",
)
def validate_registration_endpoint(
    payload: RegistrationValidationRequest,
    client: GeminiClient = Depends(get_gemini_client),
) -> RegistrationVerdict:
    verdict = validate_registration(
        client,
        name=payload.name,
        description=payload.description,
        image_base64=payload.image_base64,
    )
    return verdict.model_copy(update={"cuit": payload.cuit})


@router.post(
    "/search-expansion",
    response_model=SearchExpansionResponse,
    summary="Semantic keywords for the map search box",
)
def search_expansion(
    payload: SearchExpansionRequest,
    client: GeminiClient = Depends(get_gemini_client),
) -> SearchExpansionResponse:
    return SearchExpansionResponse(
        query=payload.query,
        keywords=expand_search_query(client, payload.query),
    )


@router.post(
    "/impact-summary",
    response_model=ImpactSummaryResponse,
    summary="One-sentence impact summary for the dashboard",
)
def impact_summary(
    stats: ImpactStats,
    client: GeminiClient = Depends(get_gemini_client),
) -> ImpactSummaryResponse:
    return ImpactSummaryResponse(summary=generate_impact_summary(client, stats))

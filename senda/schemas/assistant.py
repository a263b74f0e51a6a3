from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from senda.utils.validation import format_cuit, is_valid_cuit


class RegistrationValidationRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    cuit: Optional[str] = Field(default=None, description="CUIT de la institución")
    image_base64: Optional[str] = Field(
        default=None, description="JPEG image encoded as base64 (no data: prefix)"
    )

    @field_validator("cuit", mode="after")
    @classmethod
    def validate_cuit(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if not is_valid_cuit(v):
            raise ValueError("CUIT must have 11 digits")
        return format_cuit(v)


class RegistrationVerdict(BaseModel):
    legitimate: bool
    reason: str
    cuit: Optional[str] = None


class SearchExpansionRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=200)


class SearchExpansionResponse(BaseModel):
    query: str
    keywords: List[str]


class ImpactStats(BaseModel):
    total_institutions: int = Field(default=0, ge=0)
    total_beneficiaries: int = Field(default=0, ge=0)
    active_requests: int = Field(default=0, ge=0)


class ImpactSummaryResponse(BaseModel):
    summary: str

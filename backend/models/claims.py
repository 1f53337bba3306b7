from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.validation import InputValidator


class Claim(BaseModel):
    """An atomic factual assertion produced by claim extraction."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "claim-1",
                "text": "A house fire in Mumbai killed five people.",
                "entity_type": "event",
            }
        },
    )

    id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=5000)
    entity_type: str = "unknown"

    @field_validator('text', mode='before')
    @classmethod
    def sanitize_text(cls, v):
        return InputValidator.sanitize_required(v, "claim text")


class AggregateRequest(BaseModel):
    """A claim with the raw evidence gathered for it.

    Evidence stays loosely typed so that malformed records are skipped by the
    normalizer instead of failing the whole request.
    """
    claim: Claim
    evidence: List[Any] = Field(default_factory=list)


class BatchAggregateRequest(BaseModel):
    items: List[AggregateRequest] = Field(default_factory=list)

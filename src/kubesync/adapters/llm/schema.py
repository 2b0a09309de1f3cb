"""Structured output schema for capability inference."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from kubesync.domain.model import CapabilityAnalysisResult, Complexity


class CapabilityAnalysis(BaseModel):
    """Fields the model is asked to produce for one resource type.

    Field descriptions are sent to the model as part of the tool schema.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    capabilities: list[str] = Field(
        description=(
            "Functional capabilities this resource provides, as lowercase search terms "
            "(e.g., 'database', 'postgresql', 'load-balancer')"
        ),
    )
    providers: list[str] = Field(
        description=(
            "Cloud providers this resource supports, lowercase (e.g., 'aws', 'gcp', 'azure'). "
            "Empty list if provider-agnostic."
        ),
    )
    complexity: Literal["low", "medium", "high"] = Field(
        description=(
            "How complex the resource is to use: 'low' = few fields, "
            "'medium' = several fields, 'high' = many nested fields"
        ),
    )
    description: str = Field(
        description=(
            "1-2 sentence description of what this resource does, "
            "for a developer who has never seen it"
        ),
    )
    use_case: str = Field(
        alias="useCase",
        description=(
            "When and why a developer would use this resource. "
            "Start with a verb like 'Deploy', 'Configure', 'Manage'."
        ),
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description=(
            "Confidence in the analysis: 0.9+ for detailed schemas, "
            "0.5-0.8 for sparse ones, below 0.5 for minimal info"
        ),
    )

    def to_result(self) -> CapabilityAnalysisResult:
        return CapabilityAnalysisResult(
            capabilities=tuple(self.capabilities),
            providers=tuple(self.providers),
            complexity=Complexity(self.complexity),
            description=self.description,
            use_case=self.use_case,
            confidence=self.confidence,
        )

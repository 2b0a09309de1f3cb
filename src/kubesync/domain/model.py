"""Records flowing through the capability and instance flows.

Descriptors and candidates only live for one run. Capability records and
resource instances are upserted into the index and outlive the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

CLUSTER_SCOPE_NAMESPACE = "_cluster"
DEFAULT_NAMESPACE = "default"


class Complexity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True, frozen=True, kw_only=True)
class ResourceTypeDescriptor:
    """One row of the cluster's resource type table."""

    name: str
    short_names: tuple[str, ...] = ()
    api_version: str
    namespaced: bool
    kind: str
    verbs: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()


@dataclass(slots=True, frozen=True, kw_only=True)
class CapabilityCandidate:
    """A resource type with its schema text, ready for inference."""

    name: str  # fully-qualified: plural or plural.group
    api_version: str
    group: str
    kind: str
    namespaced: bool
    is_crd: bool
    schema: str


@dataclass(slots=True, frozen=True, kw_only=True)
class CapabilityAnalysisResult:
    """Model-inferred fields of a capability record."""

    capabilities: tuple[str, ...]
    providers: tuple[str, ...]
    complexity: Complexity
    description: str
    use_case: str
    confidence: float


@dataclass(slots=True, frozen=True, kw_only=True)
class CapabilityRecord:
    resource_name: str
    api_version: str
    group: str
    kind: str
    capabilities: tuple[str, ...]
    providers: tuple[str, ...]
    complexity: Complexity
    description: str
    use_case: str
    confidence: float

    @classmethod
    def from_analysis(
        cls,
        candidate: CapabilityCandidate,
        analysis: CapabilityAnalysisResult,
    ) -> CapabilityRecord:
        """Combine identity from ``candidate`` with the model's analysis.

        Identity fields are always copied from the candidate.
        """

        return cls(
            resource_name=candidate.name,
            api_version=candidate.api_version,
            group=candidate.group,
            kind=candidate.kind,
            capabilities=analysis.capabilities,
            providers=analysis.providers,
            complexity=analysis.complexity,
            description=analysis.description,
            use_case=analysis.use_case,
            confidence=analysis.confidence,
        )


@dataclass(slots=True, frozen=True, kw_only=True)
class ResourceInstance:
    """Lightweight metadata for one live object; spec and status are not synced."""

    id: str
    namespace: str
    name: str
    kind: str
    api_version: str
    api_group: str
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    created_at: str = ""


@dataclass(slots=True, frozen=True)
class SyncOutcome:
    """Counts reported by one sync run."""

    discovered: int = 0
    inferred: int = 0
    stored: int = 0
    deleted: int = 0

    def __post_init__(self) -> None:
        for name in ("discovered", "inferred", "stored", "deleted"):
            if getattr(self, name) < 0:
                raise ValueError(f"SyncOutcome.{name} must be non-negative")

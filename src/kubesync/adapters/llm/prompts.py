"""Prompt text for capability inference."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from kubesync.domain.model import CapabilityCandidate

SYSTEM_PROMPT: Final[str] = """\
You are a Kubernetes platform expert. You will be given one Kubernetes resource \
type together with the output of `kubectl explain --recursive` for it.

Analyze the schema and describe what the resource is for, so that developers \
can later find it by searching for what they want to do rather than for its name.

Guidelines:
- List capabilities as short lowercase search terms. Include the technology the \
resource manages (for example "postgresql" or "redis") next to the general \
category ("database", "cache").
- List cloud providers only when the schema clearly targets them. Leave the list \
empty for provider-agnostic resources.
- Rate complexity by how many fields a user has to understand: low for a handful \
of flat fields, medium for several groups, high for deeply nested specs.
- Write the description for a developer who has never seen the resource.
- Start the use case with a verb.
- Lower your confidence when the schema is sparse or only has generic fields.

Only describe what the schema supports. Do not invent fields or features.
"""


def build_human_message(candidate: CapabilityCandidate) -> str:
    return "\n".join(
        [
            f"Resource: {candidate.name}",
            f"Kind: {candidate.kind}",
            f"API Version: {candidate.api_version}",
            "",
            "Schema (kubectl explain --recursive):",
            "```",
            candidate.schema,
            "```",
        ]
    )

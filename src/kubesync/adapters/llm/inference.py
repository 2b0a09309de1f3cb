"""Sequential capability inference over discovered candidates."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from kubesync.domain.attempts import Failed, Succeeded, partition_attempts
from kubesync.domain.errors import InferenceError
from kubesync.domain.model import CapabilityRecord

from .prompts import SYSTEM_PROMPT, build_human_message
from .schema import CapabilityAnalysis

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kubesync.domain.attempts import Attempt
    from kubesync.domain.model import CapabilityCandidate
    from kubesync.domain.ports import ChatMessage, ProgressSink, StructuredModel

log = getLogger(__name__)


def infer_capability(
    candidate: CapabilityCandidate,
    *,
    model: StructuredModel,
) -> CapabilityRecord:
    """Ask ``model`` about one candidate.

    Identity fields come from the candidate. Anything identity-like the model
    returns is discarded by the schema.
    """

    messages: list[ChatMessage] = [
        ("system", SYSTEM_PROMPT),
        ("human", build_human_message(candidate)),
    ]
    try:
        payload = model.invoke(messages)
    except Exception as exc:  # noqa: BLE001
        raise InferenceError(
            f'Failed to infer capabilities for "{candidate.name}": {exc}',
            resource_name=candidate.name,
        ) from exc

    try:
        analysis = _to_analysis(payload)
    except ValidationError as exc:
        raise InferenceError(
            f'Invalid capability analysis for "{candidate.name}": {exc}',
            resource_name=candidate.name,
        ) from exc
    return CapabilityRecord.from_analysis(candidate, analysis.to_result())


def infer_capabilities(
    candidates: Sequence[CapabilityCandidate],
    *,
    model: StructuredModel,
    progress: ProgressSink,
) -> list[CapabilityRecord]:
    """Infer every candidate in order; failed candidates are dropped with a warning."""

    total = len(candidates)
    attempts: list[Attempt[CapabilityRecord]] = []
    for index, candidate in enumerate(candidates, start=1):
        progress(f"Inferring capabilities ({index} of {total}): {candidate.name}")
        try:
            record = infer_capability(candidate, model=model)
        except InferenceError as exc:
            attempts.append(Failed(subject=candidate.name, reason=str(exc)))
            continue
        attempts.append(Succeeded(subject=candidate.name, value=record))

    records = partition_attempts(attempts, stage="capability inference").values
    progress(f"Inference complete: {len(records)} of {total} resources processed.")
    return records


def _to_analysis(payload: object) -> CapabilityAnalysis:
    if isinstance(payload, CapabilityAnalysis):
        return payload
    if isinstance(payload, BaseModel):
        return CapabilityAnalysis.model_validate(payload.model_dump(by_alias=True))
    return CapabilityAnalysis.model_validate(payload)

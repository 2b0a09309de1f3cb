"""Groq chat model bound to the capability analysis schema."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from langchain_groq import ChatGroq

from .schema import CapabilityAnalysis

if TYPE_CHECKING:
    from kubesync.config.inference import InferenceConfig
    from kubesync.domain.ports import StructuredModel

log = getLogger(__name__)


def build_structured_model(config: InferenceConfig) -> StructuredModel:
    """Return a chat model whose ``invoke`` yields ``CapabilityAnalysis`` payloads."""

    llm = ChatGroq(
        api_key=config.api_key,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )
    log.info("Initialized Groq model: %s", config.model)
    return llm.with_structured_output(CapabilityAnalysis)

"""Language model configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, optional_env_var, require_env_vars

DEFAULT_INFERENCE_MODEL = "llama-3.1-8b-instant"
DEFAULT_INFERENCE_TEMPERATURE = 0.0
DEFAULT_INFERENCE_MAX_TOKENS = 1024


@dataclass(frozen=True, slots=True)
class InferenceConfig:
    """Holds the chat model settings used for capability inference."""

    api_key: str
    model: str = DEFAULT_INFERENCE_MODEL
    temperature: float = DEFAULT_INFERENCE_TEMPERATURE
    max_tokens: int = DEFAULT_INFERENCE_MAX_TOKENS


def get_inference_config() -> InferenceConfig:
    values = require_env_vars(("GROQ_API_KEY",))
    return InferenceConfig(
        api_key=values["GROQ_API_KEY"],
        model=optional_env_var("KUBESYNC_INFERENCE_MODEL") or DEFAULT_INFERENCE_MODEL,
        temperature=env_float("KUBESYNC_INFERENCE_TEMPERATURE", DEFAULT_INFERENCE_TEMPERATURE),
        max_tokens=env_int("KUBESYNC_INFERENCE_MAX_TOKENS", DEFAULT_INFERENCE_MAX_TOKENS),
    )

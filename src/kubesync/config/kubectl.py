"""kubectl executor configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, optional_env_var

DEFAULT_KUBECTL_BINARY = "kubectl"
DEFAULT_KUBECTL_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class KubectlConfig:
    binary: str = DEFAULT_KUBECTL_BINARY
    timeout_seconds: float = DEFAULT_KUBECTL_TIMEOUT_SECONDS
    context: str | None = None


def get_kubectl_config() -> KubectlConfig:
    return KubectlConfig(
        binary=optional_env_var("KUBESYNC_KUBECTL_BINARY") or DEFAULT_KUBECTL_BINARY,
        timeout_seconds=env_float("KUBESYNC_KUBECTL_TIMEOUT", DEFAULT_KUBECTL_TIMEOUT_SECONDS),
        context=optional_env_var("KUBESYNC_KUBECTL_CONTEXT"),
    )

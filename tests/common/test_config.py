from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003

import pytest

from kubesync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_chroma_config,
    get_inference_config,
    get_kubectl_config,
    get_sync_config,
    parse_chroma_url,
    require_env_var,
    require_env_vars,
)
from kubesync.config.storage import StorageConfig


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_require_env_vars_restores_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", "123")

    assert os.getenv("TEMP_VAR") == "123"
    result = require_env_var("TEMP_VAR")
    assert result == "123"


def test_kubectl_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("KUBESYNC_KUBECTL_BINARY", "KUBESYNC_KUBECTL_TIMEOUT", "KUBESYNC_KUBECTL_CONTEXT"):
        monkeypatch.delenv(name, raising=False)

    config = get_kubectl_config()

    assert config.binary == "kubectl"
    assert config.timeout_seconds == 30.0
    assert config.context is None


def test_kubectl_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KUBESYNC_KUBECTL_BINARY", "/usr/local/bin/kubectl")
    monkeypatch.setenv("KUBESYNC_KUBECTL_TIMEOUT", "12.5")
    monkeypatch.setenv("KUBESYNC_KUBECTL_CONTEXT", "kind-dev")

    config = get_kubectl_config()

    assert config.binary == "/usr/local/bin/kubectl"
    assert config.timeout_seconds == 12.5
    assert config.context == "kind-dev"


def test_kubectl_config_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KUBESYNC_KUBECTL_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="KUBESYNC_KUBECTL_TIMEOUT"):
        get_kubectl_config()


def test_inference_config_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GROQ_API_KEY", raising=False)

    with pytest.raises(MissingConfigurationError, match="GROQ_API_KEY"):
        get_inference_config()


def test_inference_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    monkeypatch.setenv("KUBESYNC_INFERENCE_MODEL", "llama-3.3-70b-versatile")
    monkeypatch.setenv("KUBESYNC_INFERENCE_MAX_TOKENS", "2048")
    monkeypatch.delenv("KUBESYNC_INFERENCE_TEMPERATURE", raising=False)

    config = get_inference_config()

    assert config.api_key == "gsk-test"
    assert config.model == "llama-3.3-70b-versatile"
    assert config.max_tokens == 2048
    assert config.temperature == 0.0


def test_sync_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "KUBESYNC_CAPABILITIES_COLLECTION",
        "KUBESYNC_INSTANCES_COLLECTION",
        "KUBESYNC_MAX_INDEXED_IDS",
    ):
        monkeypatch.delenv(name, raising=False)

    config = get_sync_config()

    assert config.capabilities_collection == "capabilities"
    assert config.instances_collection == "instances"
    assert config.max_indexed_ids == 10_000


def test_sync_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KUBESYNC_INSTANCES_COLLECTION", "prod-instances")
    monkeypatch.setenv("KUBESYNC_MAX_INDEXED_IDS", "500")

    config = get_sync_config()

    assert config.instances_collection == "prod-instances"
    assert config.max_indexed_ids == 500


@pytest.mark.parametrize(
    ("url", "host", "port", "ssl"),
    [
        ("http://localhost:8000", "localhost", 8000, False),
        ("http://chroma", "chroma", 8000, False),
        ("https://chroma.example.com", "chroma.example.com", 443, True),
    ],
)
def test_parse_chroma_url(url: str, host: str, port: int, ssl: bool) -> None:
    server = parse_chroma_url(url)

    assert (server.host, server.port, server.ssl) == (host, port, ssl)


def test_parse_chroma_url_rejects_other_schemes() -> None:
    with pytest.raises(ConfigurationError):
        parse_chroma_url("grpc://chroma:50051")


def test_chroma_config_prefers_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHROMA_URL", "http://chroma:8000")

    config = get_chroma_config()

    assert config.server is not None
    assert config.path is None


def test_chroma_config_falls_back_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("CHROMA_URL", raising=False)
    storage = StorageConfig(data_dir=tmp_path)

    config = get_chroma_config(storage=storage)

    assert config.server is None
    assert config.path == storage.chroma_path()

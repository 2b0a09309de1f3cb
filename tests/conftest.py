from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_KUBESYNC_ENV = (
    "CHROMA_URL",
    "KUBESYNC_CAPABILITIES_COLLECTION",
    "KUBESYNC_INSTANCES_COLLECTION",
    "KUBESYNC_MAX_INDEXED_IDS",
    "KUBESYNC_KUBECTL_CONTEXT",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer settings and data directories out of the tests."""

    for name in _KUBESYNC_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("KUBESYNC_DATA_DIR", str(tmp_path / "kubesync-data"))

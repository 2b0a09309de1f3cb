"""Subprocess executor for kubectl."""

from __future__ import annotations

import shlex
import subprocess
from logging import getLogger
from typing import TYPE_CHECKING

from kubesync.config.kubectl import KubectlConfig
from kubesync.domain.ports import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

log = getLogger(__name__)

API_RESOURCES_ARGS: tuple[str, ...] = ("api-resources", "-o", "wide")
CRD_LIST_ARGS: tuple[str, ...] = ("get", "crd", "-o", "json")


def explain_args(fully_qualified_name: str) -> tuple[str, ...]:
    return ("explain", fully_qualified_name, "--recursive")


def list_args(fully_qualified_name: str, *, namespaced: bool) -> tuple[str, ...]:
    if namespaced:
        return ("get", fully_qualified_name, "-A", "-o", "json")
    return ("get", fully_qualified_name, "-o", "json")


class KubectlExecutor:
    """Run kubectl synchronously, reporting every failure as an error result."""

    def __init__(self, *, config: KubectlConfig | None = None) -> None:
        self._config = config or KubectlConfig()

    def __call__(self, args: Sequence[str]) -> CommandResult:
        command = self._command(args)
        display = f"kubectl {shlex.join(args)}"
        log.debug("Running %s", shlex.join(command))
        try:
            completed = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                timeout=self._config.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired:
            return _error(display, f"timed out after {self._config.timeout_seconds:g}s")
        except OSError as exc:
            return _error(display, str(exc))

        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit status {completed.returncode}"
            return _error(display, detail)
        return CommandResult(output=completed.stdout.strip())

    def _command(self, args: Sequence[str]) -> list[str]:
        command = [self._config.binary]
        if self._config.context:
            command.extend(["--context", self._config.context])
        command.extend(args)
        return command


def _error(display: str, detail: str) -> CommandResult:
    return CommandResult(output=f'Error executing "{display}": {detail}', is_error=True)

"""Language model adapter for capability inference."""

from __future__ import annotations

from .client import build_structured_model
from .inference import infer_capabilities, infer_capability

__all__ = ["build_structured_model", "infer_capabilities", "infer_capability"]

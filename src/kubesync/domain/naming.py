"""Pure identity helpers shared by catalog parsing and both flows."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


def extract_api_group(api_version: str) -> str:
    """Return the group of ``api_version``; core resources (``v1``) have none."""

    group, slash, _version = api_version.partition("/")
    return group if slash else ""


def build_fully_qualified_name(plural: str, group: str) -> str:
    """Return ``plural`` for core types and ``plural.group`` otherwise.

    This is the form CRD names take, so it doubles as the custom-type key.
    """

    return f"{plural}.{group}" if group else plural


def build_instance_id(namespace: str, api_version: str, kind: str, name: str) -> str:
    return f"{namespace}/{api_version}/{kind}/{name}"


def is_description_annotation(key: str) -> bool:
    return key == "description" or key.endswith("/description")


def filter_description_annotations(annotations: Mapping[str, str] | None) -> dict[str, str]:
    """Keep only human-written description annotations."""

    if not annotations:
        return {}
    return {key: value for key, value in annotations.items() if is_description_annotation(key)}

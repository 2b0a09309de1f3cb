"""Map capability records and resource instances onto index documents.

The document text is what semantic search matches against, so identifiers come
first and free text last. Metadata holds flat scalars used for exact-match
filters; list values are serialized as comma-joined strings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .ports.index import IndexDocument

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model import CapabilityRecord, ResourceInstance
    from .ports.index import MetadataValue

INSTANCE_SOURCE: Final[str] = "resource-sync"


def capability_to_document(capability: CapabilityRecord) -> IndexDocument:
    return IndexDocument(
        id=capability.resource_name,
        text=_capability_text(capability),
        metadata=_capability_metadata(capability),
    )


def instance_to_document(instance: ResourceInstance) -> IndexDocument:
    return IndexDocument(
        id=instance.id,
        text=_instance_text(instance),
        metadata=_instance_metadata(instance),
    )


def _capability_text(capability: CapabilityRecord) -> str:
    group_label = f" ({capability.group})" if capability.group else ""
    lines = [f"{capability.kind}{group_label}"]

    if capability.capabilities:
        lines.append(f"Capabilities: {', '.join(capability.capabilities)}.")

    parts: list[str] = []
    if capability.providers:
        parts.append(f"Providers: {', '.join(capability.providers)}")
    parts.append(f"Complexity: {capability.complexity}")
    lines.append(". ".join(parts) + ".")

    lines.append(capability.description)
    lines.append(f"Use case: {capability.use_case}")
    return "\n".join(lines)


def _capability_metadata(capability: CapabilityRecord) -> dict[str, MetadataValue]:
    return {
        "kind": capability.kind,
        "apiGroup": capability.group,
        "apiVersion": capability.api_version,
        "complexity": str(capability.complexity),
        "providers": ",".join(capability.providers),
        "confidence": capability.confidence,
        "resourceName": capability.resource_name,
    }


def _instance_text(instance: ResourceInstance) -> str:
    parts = [
        f"{instance.kind} {instance.name}",
        f"namespace: {instance.namespace}",
        f"apiVersion: {instance.api_version}",
    ]
    if instance.labels:
        parts.append(f"labels: {_join_labels(instance.labels, ', ')}")
    if instance.annotations:
        parts.append(". ".join(instance.annotations.values()))
    return " | ".join(parts)


def _instance_metadata(instance: ResourceInstance) -> dict[str, MetadataValue]:
    return {
        "namespace": instance.namespace,
        "name": instance.name,
        "kind": instance.kind,
        "apiVersion": instance.api_version,
        "apiGroup": instance.api_group,
        "labels": _join_labels(instance.labels, ","),
        "source": INSTANCE_SOURCE,
    }


def _join_labels(labels: Mapping[str, str], separator: str) -> str:
    return separator.join(f"{key}={value}" for key, value in labels.items())

"""Exclusion policy for the resource type catalog.

The policy is conservative: a borderline type is kept rather than hidden, since
dropping a useful custom type costs more than indexing some noise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .model import ResourceTypeDescriptor

# High-churn, deprecated or internal plumbing types.
EXCLUDED_RESOURCE_NAMES: Final[frozenset[str]] = frozenset(
    {
        "events",
        "componentstatuses",
        "endpoints",
        "leases",
        "endpointslices",
    }
)


def is_indexable_type(descriptor: ResourceTypeDescriptor) -> bool:
    if "/" in descriptor.name:  # subresources such as pods/log
        return False
    if descriptor.name in EXCLUDED_RESOURCE_NAMES:
        return False
    return "get" in descriptor.verbs


def filter_resource_types(
    descriptors: Iterable[ResourceTypeDescriptor],
    allow_list: Iterable[str] | None = None,
) -> list[ResourceTypeDescriptor]:
    """Drop subresources, excluded names and types that cannot be read."""

    allowed = _allowed_names(allow_list)
    return [
        descriptor
        for descriptor in descriptors
        if is_indexable_type(descriptor) and (allowed is None or descriptor.name in allowed)
    ]


def filter_listable_resource_types(
    descriptors: Iterable[ResourceTypeDescriptor],
    allow_list: Iterable[str] | None = None,
) -> list[ResourceTypeDescriptor]:
    """Variant used for instance listing: also requires the ``list`` verb."""

    return [
        descriptor
        for descriptor in filter_resource_types(descriptors, allow_list)
        if "list" in descriptor.verbs
    ]


def _allowed_names(allow_list: Iterable[str] | None) -> frozenset[str] | None:
    if allow_list is None:
        return None
    names = frozenset(name.strip() for name in allow_list if name.strip())
    return names or None

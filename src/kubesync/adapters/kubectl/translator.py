"""Translate raw kubectl output into domain records.

This module is the decode boundary for the command executor: text and JSON are
turned into typed records exactly once, here, and ``MalformedInputError`` is
only raised from this module.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from kubesync.domain.errors import MalformedInputError
from kubesync.domain.model import (
    CLUSTER_SCOPE_NAMESPACE,
    DEFAULT_NAMESPACE,
    ResourceInstance,
    ResourceTypeDescriptor,
)
from kubesync.domain.naming import (
    build_instance_id,
    extract_api_group,
    filter_description_annotations,
)

from .schema import ObjectList

if TYPE_CHECKING:
    from .schema import ObjectItem

log = getLogger(__name__)

TYPE_TABLE_COLUMNS: Final[tuple[str, ...]] = (
    "NAME",
    "SHORTNAMES",
    "APIVERSION",
    "NAMESPACED",
    "KIND",
    "VERBS",
    "CATEGORIES",
)


def parse_type_table(text: str) -> list[ResourceTypeDescriptor]:
    """Parse ``kubectl api-resources -o wide`` output.

    Column widths depend on the data, so each column's start offset is taken
    from where its token appears in the header line. Rows are sliced between
    consecutive offsets and trimmed; the last column runs to the end of the line.
    """

    lines = text.strip("\n").splitlines()
    if not lines or not lines[0].strip():
        return []

    header = lines[0]
    offsets = _column_offsets(header)

    descriptors: list[ResourceTypeDescriptor] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        cells = _slice_row(line, offsets)
        descriptors.append(
            ResourceTypeDescriptor(
                name=cells[0],
                short_names=_split_list(cells[1]),
                api_version=cells[2],
                namespaced=cells[3] == "true",
                kind=cells[4],
                verbs=frozenset(_split_list(cells[5])),
                categories=frozenset(_split_list(cells[6])),
            )
        )
    return descriptors


def parse_instance_list(
    json_text: str,
    kind: str,
    api_version: str,
    namespaced: bool,
) -> list[ResourceInstance]:
    """Parse ``kubectl get <type> -o json`` into resource instances.

    ``kind`` and ``api_version`` come from the type catalog rather than from the
    items, since the list wrapper sometimes reports ``FooList`` instead of ``Foo``.
    """

    subject = f"{kind} ({api_version})"
    try:
        payload = ObjectList.model_validate_json(json_text)
    except ValidationError as exc:
        raise MalformedInputError(
            f"Failed to parse {subject} instances: {exc}", subject=subject
        ) from exc

    api_group = extract_api_group(api_version)
    instances: list[ResourceInstance] = []
    for item in payload.items:
        if not item.metadata.name:
            log.warning("Skipping %s item without metadata.name", subject)
            continue
        instances.append(
            _to_instance(
                item,
                kind=kind,
                api_version=api_version,
                api_group=api_group,
                namespaced=namespaced,
            )
        )
    return instances


def parse_crd_names(json_text: str) -> frozenset[str]:
    """Return the names of custom resource definitions (``plural.group``)."""

    try:
        payload = ObjectList.model_validate_json(json_text)
    except ValidationError as exc:
        raise MalformedInputError(
            f"Failed to parse custom resource definitions: {exc}",
            subject="customresourcedefinitions",
        ) from exc
    return frozenset(item.metadata.name for item in payload.items if item.metadata.name)


def _column_offsets(header: str) -> list[int]:
    offsets: list[int] = []
    for column in TYPE_TABLE_COLUMNS:
        position = header.find(column)
        if position == -1:
            raise MalformedInputError(
                f'Column "{column}" not found in api-resources header: "{header}"',
                subject="api-resources",
            )
        offsets.append(position)
    return offsets


def _slice_row(line: str, offsets: list[int]) -> list[str]:
    cells: list[str] = []
    for position, start in enumerate(offsets):
        if start >= len(line):
            cells.append("")
            continue
        end = offsets[position + 1] if position + 1 < len(offsets) else len(line)
        cells.append(line[start : min(end, len(line))].strip())
    return cells


def _split_list(value: str) -> tuple[str, ...]:
    return tuple(part for part in (piece.strip() for piece in value.split(",")) if part)


def _to_instance(
    item: ObjectItem,
    *,
    kind: str,
    api_version: str,
    api_group: str,
    namespaced: bool,
) -> ResourceInstance:
    metadata = item.metadata
    if namespaced:
        namespace = metadata.namespace or DEFAULT_NAMESPACE
    else:
        namespace = CLUSTER_SCOPE_NAMESPACE

    return ResourceInstance(
        id=build_instance_id(namespace, api_version, kind, metadata.name),
        namespace=namespace,
        name=metadata.name,
        kind=kind,
        api_version=api_version,
        api_group=api_group,
        labels=dict(metadata.labels),
        annotations=filter_description_annotations(metadata.annotations),
        created_at=metadata.creation_timestamp,
    )

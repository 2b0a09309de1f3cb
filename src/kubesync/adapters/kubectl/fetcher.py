"""Cluster discovery stages for both sync flows."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from kubesync.domain.attempts import Failed, Succeeded, partition_attempts
from kubesync.domain.errors import FatalEnumerationError, MalformedInputError
from kubesync.domain.filtering import filter_listable_resource_types, filter_resource_types
from kubesync.domain.model import CapabilityCandidate
from kubesync.domain.naming import build_fully_qualified_name, extract_api_group

from .client import API_RESOURCES_ARGS, CRD_LIST_ARGS, explain_args, list_args
from .translator import parse_crd_names, parse_instance_list, parse_type_table

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kubesync.domain.attempts import Attempt
    from kubesync.domain.model import ResourceInstance, ResourceTypeDescriptor
    from kubesync.domain.ports import CommandExecutor, ProgressSink

log = getLogger(__name__)


def discover_capability_candidates(
    *,
    execute: CommandExecutor,
    progress: ProgressSink,
    allow_list: Iterable[str] | None = None,
) -> list[CapabilityCandidate]:
    """Enumerate resource types and attach each type's recursive schema text."""

    descriptors = _enumerate_types(execute, progress)
    crd_names = _custom_type_names(execute, progress)

    filtered = filter_resource_types(descriptors, allow_list)
    progress(
        f"After filtering: {len(filtered)} resources (removed {len(descriptors) - len(filtered)})."
    )

    attempts: list[Attempt[CapabilityCandidate]] = []
    for index, descriptor in enumerate(filtered, start=1):
        group = extract_api_group(descriptor.api_version)
        fq_name = build_fully_qualified_name(descriptor.name, group)
        progress(f"Extracting schema ({index} of {len(filtered)}): {fq_name}")
        result = execute(explain_args(fq_name))
        if result.is_error:
            attempts.append(Failed(subject=fq_name, reason=result.output))
            continue
        attempts.append(
            Succeeded(
                subject=fq_name,
                value=CapabilityCandidate(
                    name=fq_name,
                    api_version=descriptor.api_version,
                    group=group,
                    kind=descriptor.kind,
                    namespaced=descriptor.namespaced,
                    is_crd=fq_name in crd_names,
                    schema=result.output,
                ),
            )
        )

    candidates = partition_attempts(attempts, stage="schema extraction").values
    progress(f"Discovery complete: {len(candidates)} resources with schemas.")
    return candidates


def discover_instances(
    *,
    execute: CommandExecutor,
    progress: ProgressSink,
    resource_types: Iterable[str] | None = None,
) -> list[ResourceInstance]:
    """List every object of every listable type; the result is the live set."""

    requested = list(resource_types) if resource_types is not None else []
    descriptors = _enumerate_types(execute, progress)
    targets = filter_listable_resource_types(descriptors, requested)
    if requested:
        progress(f"Targeting {len(targets)} resource types (from {len(requested)} requested).")
    else:
        removed = len(descriptors) - len(targets)
        progress(f"After filtering: {len(targets)} resources (removed {removed}).")

    attempts: list[Attempt[list[ResourceInstance]]] = []
    for index, descriptor in enumerate(targets, start=1):
        fq_name = build_fully_qualified_name(
            descriptor.name, extract_api_group(descriptor.api_version)
        )
        progress(f"Listing instances ({index} of {len(targets)}): {fq_name}")
        result = execute(list_args(fq_name, namespaced=descriptor.namespaced))
        if result.is_error:
            attempts.append(Failed(subject=fq_name, reason=result.output))
            continue
        # Decode failures propagate: a payload that cannot be read aborts the run.
        attempts.append(
            Succeeded(
                subject=fq_name,
                value=parse_instance_list(
                    result.output,
                    descriptor.kind,
                    descriptor.api_version,
                    descriptor.namespaced,
                ),
            )
        )

    batches = partition_attempts(attempts, stage="instance listing").values
    instances = [instance for batch in batches for instance in batch]
    progress(
        f"Discovery complete: {len(instances)} instances across {len(batches)} resource types."
    )
    return instances


def _enumerate_types(
    execute: CommandExecutor, progress: ProgressSink
) -> list[ResourceTypeDescriptor]:
    progress("Discovering API resources...")
    result = execute(API_RESOURCES_ARGS)
    if result.is_error:
        raise FatalEnumerationError(
            f"Failed to list API resources: {result.output}", output=result.output
        )
    descriptors = parse_type_table(result.output)
    progress(f"Found {len(descriptors)} API resources.")
    return descriptors


def _custom_type_names(execute: CommandExecutor, progress: ProgressSink) -> frozenset[str]:
    progress("Checking for Custom Resource Definitions...")
    result = execute(CRD_LIST_ARGS)
    if result.is_error:
        log.warning("Could not list custom resource definitions: %s", result.output)
        return frozenset()
    try:
        names = parse_crd_names(result.output)
    except MalformedInputError as exc:
        log.warning("Ignoring unreadable custom resource definition list: %s", exc)
        return frozenset()
    progress(f"Found {len(names)} CRDs.")
    return names

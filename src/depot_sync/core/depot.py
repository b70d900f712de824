"""Build depot JSON documents from template descriptors.

A depot is the JSON array pros-cli reads to discover installable templates. Each
entry mirrors the jsonpickle form of ``BaseTemplate`` with the download URL
under ``metadata.location``.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import semver

from depot_sync.core.types import TemplateDescriptor, Track

TEMPLATE_OBJECT_TAG = "pros.conductor.templates.base_template.BaseTemplate"


@dataclass(frozen=True)
class DepotJsons:
    """Serialized depot per track. ``beta`` is None when tracks are unified."""

    stable: str
    beta: str | None
    warnings: tuple[str, ...] = ()

    def for_track(self, track: Track) -> str | None:
        if track == "stable":
            return self.stable
        return self.beta


def create_depot_entry(descriptor: TemplateDescriptor) -> dict[str, Any]:
    """Convert a descriptor into a depot entry.

    Key order is fixed so serialized depots diff cleanly between runs.
    """
    return {
        "metadata": {"location": descriptor.source_url},
        "name": descriptor.name,
        "py/object": TEMPLATE_OBJECT_TAG,
        "supported_kernels": descriptor.supported_kernels,
        "target": descriptor.target,
        "version": descriptor.version,
    }


def classify_track(version: str) -> tuple[Track, str | None]:
    """Pick the track for a version string.

    Returns:
        ("beta", None) when the version has a pre-release component,
        ("stable", None) when it has none, and ("stable", warning) when the
        version is not a valid semantic version.
    """
    candidate = version.strip().lstrip("=v")
    try:
        parsed = semver.Version.parse(candidate)
    except (ValueError, TypeError):
        return "stable", f"version {version!r} is not a semantic version; publishing as stable"
    if parsed.prerelease:
        return "beta", None
    return "stable", None


def serialize_depot(entries: Sequence[dict[str, Any]], *, readable: bool) -> str:
    """Serialize depot entries.

    Readable output is indented by two spaces; compact output has no whitespace.
    """
    if readable:
        return json.dumps(list(entries), indent=2, ensure_ascii=False)
    return json.dumps(list(entries), separators=(",", ":"), ensure_ascii=False)


def assemble_depots(
    descriptors: Sequence[TemplateDescriptor], *, unified: bool, readable: bool
) -> DepotJsons:
    """Build the depot JSON for each track.

    In unified mode every entry goes into a single stable depot. Otherwise
    entries are partitioned by pre-release presence, keeping input order within
    each track.
    """
    if unified:
        entries = [create_depot_entry(d) for d in descriptors]
        return DepotJsons(stable=serialize_depot(entries, readable=readable), beta=None)

    stable_entries: list[dict[str, Any]] = []
    beta_entries: list[dict[str, Any]] = []
    warnings: list[str] = []
    for descriptor in descriptors:
        track, warning = classify_track(descriptor.version)
        if warning is not None:
            warnings.append(f"{descriptor.name}: {warning}")
        entry = create_depot_entry(descriptor)
        if track == "beta":
            beta_entries.append(entry)
        else:
            stable_entries.append(entry)

    return DepotJsons(
        stable=serialize_depot(stable_entries, readable=readable),
        beta=serialize_depot(beta_entries, readable=readable),
        warnings=tuple(warnings),
    )

"""Parse template manifests out of release asset archives.

A PROS template asset is a zip archive containing a ``template.pros`` entry. The
entry is a jsonpickle document whose template fields live under ``py/state``.
"""

import io
import json
import zipfile
import zlib
from typing import Any

from depot_sync.core.types import ExtractionError, TemplateDescriptor

TEMPLATE_MANIFEST = "template.pros"
PROJECT_MANIFEST = "project.pros"
MANIFEST_STATE_KEY = "py/state"

# Required manifest keys, in the order they are reported when missing
REQUIRED_KEYS = ("name", "supported_kernels", "target", "version")

# Raised by ZipFile.read for damaged, encrypted or exotically compressed entries
_ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    RuntimeError,
    NotImplementedError,
    OSError,
    UnicodeDecodeError,
)


def parse_template_archive(
    archive_bytes: bytes, source_url: str
) -> TemplateDescriptor | ExtractionError:
    """Locate and parse the template manifest inside a zip archive.

    Args:
        archive_bytes: Raw bytes of the downloaded asset
        source_url: URL recorded as the template's location

    Returns:
        TemplateDescriptor on success, otherwise an ExtractionError describing
        why the asset is not a usable template
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(archive_bytes))
    except zipfile.BadZipFile:
        return ExtractionError(
            kind="not_a_template",
            message="asset is not a zip archive",
            source_url=source_url,
        )
    except (OSError, ValueError) as e:
        # Zip signature found but the central directory is damaged
        return ExtractionError(
            kind="manifest_malformed",
            message="asset archive could not be opened",
            source_url=source_url,
            detail=str(e),
        )

    with archive:
        names = archive.namelist()
        if TEMPLATE_MANIFEST not in names:
            if PROJECT_MANIFEST in names:
                return ExtractionError(
                    kind="not_a_template",
                    message=(
                        f"asset is a project, not a template "
                        f"({PROJECT_MANIFEST} is present and {TEMPLATE_MANIFEST} is not)"
                    ),
                    source_url=source_url,
                    archive_entries=tuple(names),
                )
            return ExtractionError(
                kind="manifest_missing",
                message=f"{TEMPLATE_MANIFEST} not present in the archive",
                source_url=source_url,
                archive_entries=tuple(names),
            )

        try:
            text = archive.read(TEMPLATE_MANIFEST).decode("utf-8")
        except _ENTRY_READ_ERRORS as e:
            return ExtractionError(
                kind="manifest_malformed",
                message=f"{TEMPLATE_MANIFEST} could not be read",
                source_url=source_url,
                detail=str(e),
            )

    return parse_template_manifest(text, source_url)


def parse_template_manifest(text: str, source_url: str) -> TemplateDescriptor | ExtractionError:
    """Validate the text of a ``template.pros`` file into a TemplateDescriptor."""
    try:
        document: Any = json.loads(text)
    except json.JSONDecodeError as e:
        return ExtractionError(
            kind="manifest_malformed",
            message=f"{TEMPLATE_MANIFEST} is not valid JSON",
            source_url=source_url,
            detail=str(e),
        )

    if not isinstance(document, dict) or not isinstance(document.get(MANIFEST_STATE_KEY), dict):
        return ExtractionError(
            kind="manifest_malformed",
            message=f"{TEMPLATE_MANIFEST} has no {MANIFEST_STATE_KEY!r} object",
            source_url=source_url,
        )

    state: dict[str, Any] = document[MANIFEST_STATE_KEY]
    missing = tuple(key for key in REQUIRED_KEYS if key not in state)
    if missing:
        return ExtractionError(
            kind="manifest_incomplete",
            message=f"{TEMPLATE_MANIFEST}[{MANIFEST_STATE_KEY!r}] is missing required keys",
            source_url=source_url,
            missing_keys=missing,
        )

    non_strings = [key for key in REQUIRED_KEYS if not isinstance(state[key], str)]
    if non_strings:
        return ExtractionError(
            kind="manifest_invalid",
            message="failed to validate template details",
            source_url=source_url,
            detail=f"non-string values for: {', '.join(non_strings)}",
        )

    if not state["name"].strip():
        return ExtractionError(
            kind="manifest_invalid",
            message="failed to validate template details",
            source_url=source_url,
            detail="name must not be empty",
        )

    return TemplateDescriptor(
        name=state["name"],
        supported_kernels=state["supported_kernels"],
        target=state["target"],
        version=state["version"],
        source_url=source_url,
    )

"""Summarize depot changes as a commit message."""

import json
from typing import Any

from depot_sync.core.types import Track

EntryKey = tuple[str, str, str]


def _index_entries(depot_json: str) -> dict[EntryKey, dict[str, Any]]:
    """Index depot entries by (name, target, version).

    Empty or unparsable JSON is treated as an empty depot.
    """
    try:
        data = json.loads(depot_json) if depot_json.strip() else []
    except json.JSONDecodeError:
        data = []
    if not isinstance(data, list):
        return {}

    indexed: dict[EntryKey, dict[str, Any]] = {}
    for entry in data:
        if not isinstance(entry, dict):
            continue
        key = (str(entry.get("name")), str(entry.get("target")), str(entry.get("version")))
        indexed[key] = entry
    return indexed


def _format_key(key: EntryKey) -> str:
    name, target, version = key
    return f"- {name}@{version} ({target})"


def create_commit_message(new_json: str, old_json: str, *, track: Track) -> str:
    """Describe what changed between two depot documents.

    The first line counts added and removed templates, or reads "Refresh" when
    neither changed. The body lists added, removed and updated templates.
    """
    new_entries = _index_entries(new_json)
    old_entries = _index_entries(old_json)

    added = [key for key in new_entries if key not in old_entries]
    removed = [key for key in old_entries if key not in new_entries]
    updated = [
        key for key in new_entries if key in old_entries and new_entries[key] != old_entries[key]
    ]

    if added or removed:
        summary = f"Update {track} depot: {len(added)} added, {len(removed)} removed"
    else:
        # Only download locations or formatting differ
        summary = f"Refresh {track} depot"

    sections: list[str] = []
    for title, keys in (("Added", added), ("Removed", removed), ("Updated", updated)):
        if keys:
            sections.append(f"{title}:\n" + "\n".join(_format_key(key) for key in keys))

    if not sections:
        return summary
    return summary + "\n\n" + "\n\n".join(sections)

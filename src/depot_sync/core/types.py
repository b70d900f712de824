"""Domain types shared across the depot pipeline."""

from dataclasses import dataclass, field
from typing import Literal

Track = Literal["stable", "beta"]

ExtractionErrorKind = Literal[
    "not_a_template",
    "manifest_missing",
    "download_failed",
    "manifest_malformed",
    "manifest_incomplete",
    "manifest_invalid",
]

# Kinds describing assets that simply aren't templates, as opposed to broken ones
NON_TEMPLATE_KINDS: frozenset[ExtractionErrorKind] = frozenset(
    {"not_a_template", "manifest_missing"}
)


@dataclass(frozen=True)
class TemplateDescriptor:
    """A template package described by the manifest inside a release asset."""

    name: str
    supported_kernels: str
    target: str
    version: str
    source_url: str


@dataclass(frozen=True)
class ExtractionError:
    """Why a release asset did not yield a TemplateDescriptor.

    Callers branch on ``kind``; the remaining fields carry diagnostics.
    """

    kind: ExtractionErrorKind
    message: str
    source_url: str
    archive_entries: tuple[str, ...] = ()
    missing_keys: tuple[str, ...] = ()
    detail: str | None = None

    def describe(self) -> str:
        """One-line human-readable description for warnings."""
        text = f"{self.message} ({self.source_url})"
        if self.missing_keys:
            text += f"; missing keys: {', '.join(self.missing_keys)}"
        if self.detail:
            text += f"; {self.detail}"
        return text


@dataclass(frozen=True)
class DestinationRoute:
    """Where one track's depot file lives in the destination repository."""

    track: Track
    branch: str
    path: str

    @property
    def location(self) -> tuple[str, str]:
        return (self.branch, self.path)

    @property
    def is_complete(self) -> bool:
        return bool(self.branch) and bool(self.path)

    def __str__(self) -> str:
        return f"{self.track} -> {self.branch}:{self.path}"


def routes_are_unified(stable: DestinationRoute, beta: DestinationRoute) -> bool:
    """Return True when both tracks publish to the same file."""
    return stable.location == beta.location


@dataclass(frozen=True)
class ExtractionReport:
    """Result of extracting every asset: descriptors plus collected failures."""

    descriptors: list[TemplateDescriptor] = field(default_factory=list)
    errors: list[ExtractionError] = field(default_factory=list)

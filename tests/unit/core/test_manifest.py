"""Tests for template manifest parsing."""

import json
import zipfile

import pytest

from depot_sync.core.manifest import (
    REQUIRED_KEYS,
    parse_template_archive,
    parse_template_manifest,
)
from depot_sync.core.types import ExtractionError, TemplateDescriptor
from tests.test_utils.archives import (
    corrupt_first_entry_payload,
    make_manifest,
    make_zip,
    rewrite_entry_header,
    template_state,
)

URL = "https://example.com/kernel@3.8.0.zip"


def test_parse_archive_preserves_fields() -> None:
    state = template_state(
        name="okapilib", version="4.8.0", target="v5", supported_kernels="^3.8.0"
    )
    archive = make_zip({"template.pros": make_manifest(state), "include/okapi/api.hpp": ""})

    result = parse_template_archive(archive, URL)

    assert result == TemplateDescriptor(
        name="okapilib",
        supported_kernels="^3.8.0",
        target="v5",
        version="4.8.0",
        source_url=URL,
    )


def test_project_archive_is_not_a_template() -> None:
    archive = make_zip({"project.pros": "{}", "src/main.cpp": ""})

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "not_a_template"
    assert result.archive_entries == ("project.pros", "src/main.cpp")
    assert result.source_url == URL


def test_archive_without_manifest_lists_entries() -> None:
    archive = make_zip({"README.md": "hello", "lib/a.a": b"\x00"})

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_missing"
    assert result.archive_entries == ("README.md", "lib/a.a")


def test_non_zip_asset_is_not_a_template() -> None:
    result = parse_template_archive(b"\x1f\x8b\x08 definitely a tarball", URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "not_a_template"


def test_invalid_json_is_malformed() -> None:
    result = parse_template_manifest("{not json", URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"
    assert result.detail is not None


@pytest.mark.parametrize(
    "document",
    [
        json.dumps({"name": "kernel"}),
        json.dumps({"py/state": "kernel"}),
        json.dumps({"py/state": None}),
        json.dumps(["py/state"]),
    ],
)
def test_missing_or_non_object_state_is_malformed(document: str) -> None:
    result = parse_template_manifest(document, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"


@pytest.mark.parametrize("missing_key", REQUIRED_KEYS)
def test_missing_key_is_reported_exactly(missing_key: str) -> None:
    state = template_state()
    del state[missing_key]

    result = parse_template_manifest(make_manifest(state), URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_incomplete"
    assert result.missing_keys == (missing_key,)


def test_several_missing_keys_are_reported_in_canonical_order() -> None:
    result = parse_template_manifest(make_manifest({"target": "v5"}), URL)

    assert isinstance(result, ExtractionError)
    assert result.missing_keys == ("name", "supported_kernels", "version")


@pytest.mark.parametrize("bad_value", [None, 3, ["3.8.0"], {"major": 3}])
def test_non_string_value_is_invalid(bad_value: object) -> None:
    state = template_state()
    state["version"] = bad_value

    result = parse_template_manifest(make_manifest(state), URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_invalid"
    assert result.detail is not None
    assert "version" in result.detail


def test_describe_includes_missing_keys() -> None:
    result = parse_template_manifest(make_manifest({"name": "kernel"}), URL)

    assert isinstance(result, ExtractionError)
    assert "supported_kernels, target, version" in result.describe()
    assert URL in result.describe()


def _manifest_only_archive(compression: int = zipfile.ZIP_STORED) -> bytes:
    return make_zip({"template.pros": make_manifest(template_state())}, compression)


def test_corrupt_compressed_manifest_is_malformed() -> None:
    archive = corrupt_first_entry_payload(_manifest_only_archive(zipfile.ZIP_DEFLATED))

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"
    assert result.source_url == URL


def test_encrypted_manifest_is_malformed() -> None:
    archive = rewrite_entry_header(_manifest_only_archive(), flag_bits=0x1)

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"
    assert result.detail is not None
    assert "encrypted" in result.detail


def test_unsupported_compression_method_is_malformed() -> None:
    archive = rewrite_entry_header(_manifest_only_archive(), compress_type=99)

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"
    assert result.detail is not None
    assert "not supported" in result.detail


def test_non_utf8_manifest_is_malformed() -> None:
    archive = make_zip({"template.pros": b"\xff\xfe{"})

    result = parse_template_archive(archive, URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"


@pytest.mark.parametrize("error", [OSError("seek failed"), ValueError("negative seek value")])
def test_archive_that_cannot_be_opened_is_malformed(
    monkeypatch: pytest.MonkeyPatch, error: Exception
) -> None:
    def _raise(*args: object, **kwargs: object) -> zipfile.ZipFile:
        raise error

    monkeypatch.setattr(zipfile, "ZipFile", _raise)

    result = parse_template_archive(b"PK\x05\x06", URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_malformed"
    assert result.detail == str(error)


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_is_invalid(name: str) -> None:
    result = parse_template_manifest(make_manifest(template_state(name=name)), URL)

    assert isinstance(result, ExtractionError)
    assert result.kind == "manifest_invalid"
    assert result.detail == "name must not be empty"

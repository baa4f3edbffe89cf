"""Tests for motif data models."""

import pytest
from motif_installer import InstallResult
from motif_installer import MotifMetadata
from motif_installer import PackageIdentity
from pydantic import ValidationError


def test_identity_install_path():
    identity = PackageIdentity(supplier="acme", package="dark-theme")

    assert identity.install_path == "acme/dark-theme"


def test_identity_is_frozen():
    """Test identity is immutable."""
    identity = PackageIdentity(supplier="acme", package="dark-theme")

    with pytest.raises(ValidationError):
        identity.package = "light-theme"  # type: ignore


@pytest.mark.parametrize(
    "comment",
    [None, b"", b"{}", b"not json", b"[1, 2]", b'"blog"', b"\xff\xfe"],
)
def test_metadata_global_for_unusable_comments(comment):
    """Absent, malformed or mistyped comments mean a global motif."""
    assert MotifMetadata.from_comment(comment).is_global


def test_metadata_cabin_from_bytes():
    metadata = MotifMetadata.from_comment(b'{"cabin": "blog", "author": "someone"}')

    assert metadata.cabin == "blog"


def test_metadata_cabin_from_str():
    assert MotifMetadata.from_comment('{"cabin": "Hull"}').cabin == "Hull"


def test_install_result_truthiness():
    assert InstallResult(success=True)
    assert not InstallResult(success=False, error="boom")


def test_metadata_numeric_cabin_is_a_name():
    """Numbers name a cabin instead of making the motif global."""
    metadata = MotifMetadata.from_comment(b'{"cabin": 123}')

    assert metadata.cabin == "123"
    assert not metadata.is_global


@pytest.mark.parametrize("comment", [b'{"cabin": ["blog"]}', b'{"cabin": {"name": "blog"}}', b'{"cabin": true}'])
def test_metadata_unusable_cabin_is_never_global(comment):
    """A present but unusable cabin value matches no cabin."""
    metadata = MotifMetadata.from_comment(comment)

    assert not metadata.is_global
    assert metadata.cabin == ""


def test_metadata_null_cabin_is_global():
    assert MotifMetadata.from_comment(b'{"cabin": null}').is_global

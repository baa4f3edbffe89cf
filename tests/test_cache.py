"""Tests for file-based cache invalidation."""

from unittest.mock import patch

import pytest
from motif_installer import CacheInvalidationError
from motif_installer import FileCacheInvalidator


def test_clear_cache_empties_known_subdirs(tmp_path):
    twig = tmp_path / "twig"
    (twig / "nested").mkdir(parents=True)
    (twig / "nested" / "page.php").write_text("<?php")
    (twig / "index.php").write_text("<?php")
    (tmp_path / "static").mkdir()
    (tmp_path / "static" / "home.html").write_text("<html>")

    assert FileCacheInvalidator(tmp_path).clear_cache() is True

    assert twig.is_dir()
    assert list(twig.iterdir()) == []
    assert list((tmp_path / "static").iterdir()) == []


def test_clear_cache_leaves_unknown_subdirs(tmp_path):
    (tmp_path / "sessions").mkdir()
    (tmp_path / "sessions" / "abc").write_text("keep")

    FileCacheInvalidator(tmp_path).clear_cache()

    assert (tmp_path / "sessions" / "abc").exists()


def test_clear_cache_missing_root(tmp_path):
    assert FileCacheInvalidator(tmp_path / "nope").clear_cache() is True


def test_clear_cache_custom_subdirs(tmp_path):
    (tmp_path / "custom").mkdir()
    (tmp_path / "custom" / "x").write_text("x")

    FileCacheInvalidator(tmp_path, subdirs=("custom",)).clear_cache()

    assert list((tmp_path / "custom").iterdir()) == []


def test_clear_cache_failure_wrapped(tmp_path):
    (tmp_path / "hash").mkdir()
    (tmp_path / "hash" / "x").write_text("x")

    with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
        with pytest.raises(CacheInvalidationError, match="denied"):
            FileCacheInvalidator(tmp_path).clear_cache()

"""Tests for cabin motif registries."""

import json

import pytest
from motif_installer import InstallerConfig
from motif_installer import MotifRegistry
from motif_installer import RegistryReadError
from motif_installer import RegistryStore
from motif_installer import RegistryWriteError
from motif_installer import resolve_name


def test_resolve_name_unused():
    """Free name is returned unchanged."""
    assert resolve_name({"other"}, "theme") == "theme"


def test_resolve_name_appends_lowest_free_suffix():
    """Collisions probe -2, -3, ... in order."""
    assert resolve_name({"theme"}, "theme") == "theme-2"
    assert resolve_name({"theme", "theme-2", "theme-3"}, "theme") == "theme-4"


def test_resolve_name_fills_gap():
    """First free suffix wins even if higher ones are taken."""
    assert resolve_name({"theme", "theme-3"}, "theme") == "theme-2"


def test_registry_put_and_order():
    """Entries keep insertion order."""
    registry = MotifRegistry()
    registry.put("b", "acme/b")
    registry.put("a", "acme/a")

    assert registry.names() == ["b", "a"]
    entry = registry.get("a")
    assert entry is not None
    assert entry.path == "acme/a"


def test_registry_json_format():
    """Serialized as a pretty-printed JSON object."""
    registry = MotifRegistry()
    registry.put("dark-theme", "acme/dark-theme")

    text = registry.to_json()

    assert json.loads(text) == {"dark-theme": {"path": "acme/dark-theme"}}
    assert text.endswith("\n")
    assert '    "dark-theme"' in text


def test_registry_from_json_rejects_non_object():
    with pytest.raises(ValueError):
        MotifRegistry.from_json("[1, 2]")


def test_registry_preserves_unknown_entry_keys():
    """Extra per-entry keys survive a round trip."""
    registry = MotifRegistry.from_json('{"x": {"path": "a/x", "enabled": true}}')

    assert json.loads(registry.to_json()) == {"x": {"path": "a/x", "enabled": True}}


def test_load_missing_file_is_empty(tmp_path):
    (tmp_path / "Cabin" / "main").mkdir(parents=True)
    store = RegistryStore(InstallerConfig(root=tmp_path))

    registry = store.load("main")

    assert len(registry) == 0


def test_save_then_load(tmp_path):
    (tmp_path / "Cabin" / "main").mkdir(parents=True)
    store = RegistryStore(InstallerConfig(root=tmp_path))

    registry = store.load("main")
    registry.put("dark-theme", "acme/dark-theme")
    store.save("main", registry)

    reloaded = store.load("main")
    assert "dark-theme" in reloaded
    assert (tmp_path / "Cabin" / "main" / "config" / "motifs.json").exists()


def test_save_load_round_trip_is_stable(tmp_path):
    """Saving an unchanged registry leaves the file byte-identical."""
    (tmp_path / "Cabin" / "main").mkdir(parents=True)
    store = RegistryStore(InstallerConfig(root=tmp_path))
    registry = store.load("main")
    registry.put("b-theme", "acme/b-theme")
    registry.put("a-theme", "acme/a-theme")
    store.save("main", registry)

    registry_path = tmp_path / "Cabin" / "main" / "config" / "motifs.json"
    before = registry_path.read_bytes()

    store.save("main", store.load("main"))

    assert registry_path.read_bytes() == before


def test_save_leaves_no_temp_files(tmp_path):
    (tmp_path / "Cabin" / "main").mkdir(parents=True)
    store = RegistryStore(InstallerConfig(root=tmp_path))

    store.save("main", MotifRegistry())

    config_dir = tmp_path / "Cabin" / "main" / "config"
    assert [p.name for p in config_dir.iterdir()] == ["motifs.json"]


def test_load_malformed_raises(tmp_path):
    """Unparseable registry is an error, not an empty registry."""
    config_dir = tmp_path / "Cabin" / "main" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "motifs.json").write_text("{not json")
    store = RegistryStore(InstallerConfig(root=tmp_path))

    with pytest.raises(RegistryReadError, match="main"):
        store.load("main")


def test_save_into_missing_cabin_raises(tmp_path):
    """Saving never recreates a cabin directory."""
    store = RegistryStore(InstallerConfig(root=tmp_path))

    with pytest.raises(RegistryWriteError):
        store.save("ghost", MotifRegistry())

    assert not (tmp_path / "Cabin" / "ghost").exists()


def test_custom_registry_filename(tmp_path):
    (tmp_path / "Cabin" / "main").mkdir(parents=True)
    store = RegistryStore(InstallerConfig(root=tmp_path, registry_filename="themes.json"))

    store.save("main", MotifRegistry())

    assert (tmp_path / "Cabin" / "main" / "config" / "themes.json").exists()


def test_locks_are_per_cabin(tmp_path):
    """Different cabins use different locks."""
    store = RegistryStore(InstallerConfig(root=tmp_path))

    with store.locked("main"):
        with store.locked("admin"):
            pass

"""Tests for the allow-list store."""

import json

import pytest

from strict_migrate.store import AllowListStore


@pytest.fixture
def project(tmp_path):
    for name in ("a.py", "b.py", "c.py", "legacy/old.py", "legacy/new.py"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    (tmp_path / "notes.txt").write_text("")
    return tmp_path


def _write(path, data):
    path.write_text(json.dumps(data))


def _abs(root, *names):
    return {str((root / n).resolve()) for n in names}


class TestLoad:
    def test_missing_store_is_empty(self, project):
        assert AllowListStore(project / "strict-files.json").load() == set()

    def test_files_entries(self, project):
        store_path = project / "strict-files.json"
        _write(store_path, {"files": ["./a.py", "b.py", "./notes.txt"]})
        assert AllowListStore(store_path).load() == _abs(project, "a.py", "b.py")

    def test_include_minus_exclude_plus_files(self, project):
        store_path = project / "strict-files.json"
        _write(store_path, {
            "include": ["legacy/**/*.py"],
            "exclude": ["./legacy/old.py"],
            "files": ["./c.py"],
        })
        assert AllowListStore(store_path).load() == _abs(project, "legacy/new.py", "c.py")

    def test_invalid_json(self, project):
        store_path = project / "strict-files.json"
        store_path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid allow-list"):
            AllowListStore(store_path).load()


class TestAdd:
    def test_creates_store(self, project):
        store = AllowListStore(project / "strict-files.json")
        written = store.add(_abs(project, "b.py", "a.py"))
        assert written == ["./a.py", "./b.py"]
        data = json.loads((project / "strict-files.json").read_text())
        assert data["files"] == ["./a.py", "./b.py"]
        assert store.load() == _abs(project, "a.py", "b.py")

    def test_append_only(self, project):
        store = AllowListStore(project / "strict-files.json")
        store.add(_abs(project, "a.py"))
        store.add(_abs(project, "c.py"))
        assert store.add(_abs(project, "a.py")) == []
        assert store.load() == _abs(project, "a.py", "c.py")

    def test_unexcludes_included_file(self, project):
        store_path = project / "strict-files.json"
        _write(store_path, {"include": ["legacy/*.py"], "exclude": ["./legacy/old.py"], "files": []})
        store = AllowListStore(store_path)
        assert store.add(_abs(project, "legacy/old.py")) == ["./legacy/old.py"]
        data = json.loads(store_path.read_text())
        assert data["exclude"] == []
        assert data["files"] == []
        assert store.load() == _abs(project, "legacy/old.py", "legacy/new.py")

    def test_excluded_but_not_included_goes_to_files(self, project):
        store_path = project / "strict-files.json"
        _write(store_path, {"exclude": ["./a.py"]})
        store = AllowListStore(store_path)
        store.add(_abs(project, "a.py"))
        assert store.load() == _abs(project, "a.py")

    def test_preserves_unknown_keys(self, project):
        store_path = project / "strict-files.json"
        _write(store_path, {"compilerOptions": {"strict": True}, "files": []})
        AllowListStore(store_path).add(_abs(project, "a.py"))
        assert json.loads(store_path.read_text())["compilerOptions"] == {"strict": True}

    def test_add_nothing_does_not_write(self, project):
        store = AllowListStore(project / "strict-files.json")
        assert store.add([]) == []
        assert not (project / "strict-files.json").exists()

    def test_store_outside_source_tree(self, project, tmp_path_factory):
        config_dir = tmp_path_factory.mktemp("config")
        store = AllowListStore(config_dir / "strict.json")
        written = store.add(_abs(project, "a.py", "legacy/old.py"))
        assert all(entry.startswith("../") for entry in written)
        assert store.load() == _abs(project, "a.py", "legacy/old.py")

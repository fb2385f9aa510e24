"""Tests for source file discovery."""

from pathlib import Path

from strict_migrate.models import Language
from strict_migrate.scanner import discover_files, is_tracked_path

FIXTURES = Path(__file__).parent / "fixtures"


def _names(files, root):
    return sorted(Path(f).relative_to(root.resolve()).as_posix() for f in files)


def test_discover_python():
    root = FIXTURES / "py_project"
    files = discover_files(root, [Language.PYTHON])
    assert _names(files, root) == [
        "app/__init__.py",
        "app/broken.py",
        "app/core.py",
        "app/cycle_a.py",
        "app/cycle_b.py",
        "app/models.py",
        "app/service.py",
    ]
    assert all(Path(f).is_absolute() for f in files)


def test_discover_typescript_skips_stories_and_node_modules():
    root = FIXTURES / "ts_project"
    files = discover_files(root, [Language.TYPESCRIPT])
    assert _names(files, root) == [
        "src/api.ts",
        "src/app.tsx",
        "src/components/button.tsx",
        "src/components/index.ts",
        "src/missing.ts",
        "src/util.ts",
    ]


def test_skip_dirs_patterns(tmp_path):
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "a.py").write_text("")
    (tmp_path / "pkg.egg-info").mkdir()
    (tmp_path / "pkg.egg-info" / "b.py").write_text("")
    (tmp_path / ".venv" / "lib").mkdir(parents=True)
    (tmp_path / ".venv" / "lib" / "c.py").write_text("")

    files = discover_files(tmp_path, [Language.PYTHON], skip_dirs=["*.egg-info", ".venv"])
    assert _names(files, tmp_path) == ["pkg/a.py"]


def test_skip_dirs_only_apply_below_root(tmp_path):
    root = tmp_path / "build"
    root.mkdir()
    (root / "a.py").write_text("")
    assert _names(discover_files(root, [Language.PYTHON]), root) == ["a.py"]


def test_is_tracked_path():
    assert is_tracked_path(Path("x/a.py"), [Language.PYTHON])
    assert not is_tracked_path(Path("x/a.ts"), [Language.PYTHON])
    assert is_tracked_path(Path("x/a.d.ts"), [Language.TYPESCRIPT])
    assert not is_tracked_path(Path("x/a.stories.tsx"), [Language.TYPESCRIPT])

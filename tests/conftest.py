"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from safe_merge.models import Action, ActionKind


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_trees(temp_dir):
    """Create a source tree and an empty destination folder."""
    source = temp_dir / "source"
    target = temp_dir / "target"

    source.mkdir()
    target.mkdir()

    (source / "a").mkdir()
    (source / "a" / "x.txt").write_text("hello")
    (source / "b.txt").write_text("world")

    return source, target


@pytest.fixture
def overlapping_trees(temp_dir):
    """Create source and destination folders sharing some files."""
    source = temp_dir / "source"
    target = temp_dir / "target"

    source.mkdir()
    target.mkdir()

    # Files only in source
    (source / "only_in_source.txt").write_text("only in source")
    (source / "subdir").mkdir()
    (source / "subdir" / "nested.txt").write_text("nested in source")

    # Files only in target
    (target / "only_in_target.txt").write_text("only in target")

    # Identical files in both
    (source / "identical.txt").write_text("same content")
    (target / "identical.txt").write_text("same content")

    return source, target


@pytest.fixture
def sample_action():
    """Create a sample COPY_FILE action for testing."""
    return Action(
        kind=ActionKind.COPY_FILE,
        source_path="/src/file.txt",
        destination_path="/dst/file.txt",
    )


@pytest.fixture
def snapshot_tree():
    """Return a helper mapping every relative path under a root to its bytes."""
    def _snapshot(root: Path) -> dict[str, bytes | None]:
        snapshot = {}
        for path in sorted(root.rglob("*")):
            rel = path.relative_to(root).as_posix()
            snapshot[rel] = None if path.is_dir() else path.read_bytes()
        return snapshot
    return _snapshot

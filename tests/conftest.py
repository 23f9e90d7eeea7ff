"""Shared fixtures for pathsieve tests."""

from __future__ import annotations

from pathlib import Path

import pytest


class RecordingSink:
    """Diagnostics sink that keeps formatted messages per level."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def debug(self, msg: str, *args: object) -> None:
        self.records.append(("debug", msg % args))

    def warning(self, msg: str, *args: object) -> None:
        self.records.append(("warning", msg % args))

    def error(self, msg: str, *args: object) -> None:
        self.records.append(("error", msg % args))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.records if lvl == level]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create a small Rust-style project tree.

    Structure::

        root/
        ├── src/
        │   ├── main.rs
        │   └── lib.rs
        ├── target/
        │   └── debug/
        │       └── build
        ├── main.rs
        ├── foo.txt
        ├── [abc].txt
        └── README.md
    """
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.rs").write_text("fn main() {}")
    (tmp_path / "src" / "lib.rs").write_text("pub fn lib() {}")
    (tmp_path / "target" / "debug").mkdir(parents=True)
    (tmp_path / "target" / "debug" / "build").write_text("build")
    (tmp_path / "main.rs").write_text("fn main() {}")
    (tmp_path / "foo.txt").write_text("foo")
    (tmp_path / "[abc].txt").write_text("abc")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path

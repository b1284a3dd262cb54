"""Tests for component file discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from reactscope.discovery import ComponentScanner, hash_file, is_component_file
from tests._fixtures.project_builder import ProjectBuilder


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("Button.tsx", True),
        ("Button.jsx", True),
        ("store.ts", True),
        ("legacy.js", True),
        ("types.d.ts", False),
        ("styles.css", False),
        ("README.md", False),
    ],
)
def test_is_component_file(filename: str, expected: bool) -> None:
    assert is_component_file(filename) is expected


def test_scan_skips_vendor_build_and_hidden_directories(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            "src/App.tsx": "export function App() { return null; }\n",
            "src/utils/format.ts": "export const f = 1;\n",
            "src/types.d.ts": "declare const x: number;\n",
            "node_modules/react/index.js": "module.exports = {};\n",
            "dist/App.js": "export {};\n",
            "build/App.js": "export {};\n",
            "coverage/lcov.js": "export {};\n",
            ".storybook/main.js": "export {};\n",
        }
    )

    files = project_builder.scan()

    root = project_builder.path().resolve()
    assert [path.relative_to(root).as_posix() for path in files] == [
        "src/App.tsx",
        "src/utils/format.ts",
    ]


def test_scan_honours_gitignore_and_exclude_paths(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".gitignore": "generated/\n*.stories.tsx\n!Keep.stories.tsx\n",
            "src/Button.tsx": "export const Button = () => null;\n",
            "src/Button.stories.tsx": "export default {};\n",
            "src/Keep.stories.tsx": "export default {};\n",
            "generated/Api.ts": "export {};\n",
            "legacy/Old.jsx": "export {};\n",
        }
    )

    scanner = ComponentScanner(exclude_paths=["legacy/"])
    files = scanner.scan(project_builder.path())

    names = sorted(path.name for path in files)
    assert names == ["Button.tsx", "Keep.stories.tsx"]


def test_scan_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ComponentScanner().scan(tmp_path / "missing")


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "App.tsx"
    target.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        ComponentScanner().scan(target)


def test_hash_file_tracks_content(tmp_path: Path) -> None:
    target = tmp_path / "App.tsx"
    target.write_text("one", encoding="utf-8")
    first = hash_file(target)
    target.write_text("two", encoding="utf-8")

    assert hash_file(target) != first
    assert len(first) == 64

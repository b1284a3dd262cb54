"""Tests for .reactscope.yml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from reactscope.config import CONFIG_FILENAME, DEFAULT_PROPS_COMMAND, load_config
from reactscope.errors import ConfigError


def _write_config(root: Path, text: str) -> None:
    (root / CONFIG_FILENAME).write_text(text, encoding="utf-8")


def test_defaults_when_config_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.root == tmp_path.resolve()
    assert config.exclude_paths == []
    assert config.analysis.dedupe_hooks is True
    assert config.analysis.max_workers == 1
    assert config.props.enabled is True
    assert config.props.command == list(DEFAULT_PROPS_COMMAND)
    assert config.cache.enabled is False


def test_loads_all_sections(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude_paths:
  - stories/
  - "**/*.test.tsx"
analysis:
  dedupe_hooks: false
  max_workers: 4
props:
  enabled: yes
  command: node_modules/.bin/react-docgen --resolver find-all-exported-components
  timeout: 12
cache:
  enabled: true
""",
    )

    config = load_config(tmp_path)

    assert config.exclude_paths == ["stories/", "**/*.test.tsx"]
    assert config.analysis.dedupe_hooks is False
    assert config.analysis.max_workers == 4
    assert config.props.command == [
        "node_modules/.bin/react-docgen",
        "--resolver",
        "find-all-exported-components",
    ]
    assert config.props.timeout == 12.0
    assert config.cache.enabled is True


def test_accepts_config_file_path(tmp_path: Path) -> None:
    _write_config(tmp_path, "props:\n  command: [react-docgen]\n")

    config = load_config(tmp_path / CONFIG_FILENAME)

    assert config.props.command == ["react-docgen"]


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "\n")

    assert load_config(tmp_path).analysis.max_workers == 1


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "analysis: [unclosed\n",
        "analysis:\n  max_workers: 0\n",
        "props:\n  command: []\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    _write_config(tmp_path, text)

    with pytest.raises(ConfigError):
        load_config(tmp_path)

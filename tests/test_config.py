from __future__ import annotations

import pytest

from jate.config import EditorConfig


def test_defaults() -> None:
    config = EditorConfig()

    assert config.tab_stop == 8
    assert config.quit_times == 3
    assert config.message_ttl == 5.0
    assert config.banner == "Jate editor -- version 0.0.1"


def test_from_env_reads_overrides() -> None:
    config = EditorConfig.from_env(
        {"JATE_TAB_STOP": "4", "JATE_QUIT_TIMES": "1", "JATE_MESSAGE_TTL": "2.5"}
    )

    assert config.tab_stop == 4
    assert config.quit_times == 1
    assert config.message_ttl == 2.5


def test_from_env_ignores_unusable_values() -> None:
    config = EditorConfig.from_env(
        {"JATE_TAB_STOP": "zero", "JATE_QUIT_TIMES": "-2", "JATE_MESSAGE_TTL": "0"}
    )

    assert config == EditorConfig()


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        EditorConfig(tab_stop=0)
    with pytest.raises(ValueError):
        EditorConfig(escape_lookahead=1)


def test_describe_lists_fields() -> None:
    assert EditorConfig().describe()["quit_times"] == 3

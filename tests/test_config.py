import pytest

from line_editor.config import MAX_LINES, UNDO_LIMIT, EditorConfig


def test_defaults() -> None:
    config = EditorConfig.from_env({})

    assert config.max_lines == MAX_LINES == 25
    assert config.undo_limit == UNDO_LIMIT == 3


def test_env_overrides() -> None:
    config = EditorConfig.from_env(
        {"LINE_EDITOR_MAX_LINES": "40", "LINE_EDITOR_UNDO_LIMIT": "7"}
    )

    assert config == EditorConfig(max_lines=40, undo_limit=7)


@pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
def test_invalid_env_values_fall_back(raw: str) -> None:
    config = EditorConfig.from_env({"LINE_EDITOR_MAX_LINES": raw})

    assert config.max_lines == MAX_LINES


def test_with_overrides_keeps_unset_values() -> None:
    config = EditorConfig(max_lines=10, undo_limit=2)

    assert config.with_overrides(undo_limit=4) == EditorConfig(10, 4)
    assert config.with_overrides() == config


def test_rejects_non_positive_limits() -> None:
    with pytest.raises(ValueError):
        EditorConfig(max_lines=0)
    with pytest.raises(ValueError):
        EditorConfig(undo_limit=0)

from __future__ import annotations

from typing import List

import pytest

from line_editor.commands import (
    CommandArgumentError,
    CommandContext,
    bind_arguments,
    coerce_arguments,
    execute,
    lookup,
    parse_command_line,
    render_buffer,
    render_line,
)


def make_context(*lines: str) -> CommandContext:
    context = CommandContext.create()
    for index, text in enumerate(lines):
        context.buffer.insert_line(index, text)
    return context


def run(context: CommandContext, line: str):
    name, remainder = parse_command_line(line)
    spec = lookup(name)
    args = bind_arguments(spec, remainder) if spec else {}
    return execute(context, name, args)


def test_parse_command_line_splits_name_and_remainder() -> None:
    assert parse_command_line("  INSERT 3 hello   world ") == (
        "insert",
        "3 hello   world",
    )
    assert parse_command_line("   ") == ("", "")


def test_bind_arguments_rest_keeps_spacing() -> None:
    spec = lookup("insert")
    assert spec is not None

    args = bind_arguments(spec, "3 hello   world")

    assert args == {"line": "3", "text": "hello   world"}


def test_bind_arguments_partial_leaves_missing_out() -> None:
    spec = lookup("update")
    assert spec is not None

    assert bind_arguments(spec, "2") == {"line": "2"}
    assert bind_arguments(spec, "") == {}


def test_bind_arguments_rejects_extra_tokens() -> None:
    spec = lookup("delete")
    assert spec is not None

    with pytest.raises(CommandArgumentError):
        bind_arguments(spec, "1 2")


def test_coerce_arguments_reports_bad_numbers() -> None:
    spec = lookup("delete")
    assert spec is not None

    with pytest.raises(CommandArgumentError) as excinfo:
        coerce_arguments(spec, {"line": "two"}, 25)

    assert excinfo.value.parameter == "line"


def test_insert_reports_buffer_size() -> None:
    context = make_context()

    result = run(context, "insert 1 hello world")

    assert result.status == "ok"
    assert result.message == "Line inserted successfully. Buffer size: 1/25"
    assert context.buffer.lines == ("hello world",)


@pytest.mark.parametrize("line", ["0", "26", "-3"])
def test_insert_rejects_out_of_range_line(line: str) -> None:
    context = make_context()

    result = run(context, f"insert {line} text")

    assert result.failed
    assert result.message == "Error: Line number must be between 1 and 25"
    assert not context.buffer.can_undo


def test_insert_on_full_buffer_reports_capacity_error() -> None:
    context = make_context(*["x"] * 25)

    result = run(context, "insert 1 more")

    assert result.failed
    assert "buffer is full" in (result.message or "")


def test_search_reports_one_based_line() -> None:
    context = make_context("cat dog", "dog cat")

    found = run(context, "search dog")
    missing = run(context, "search bird")

    assert found.message == "Found at line 1, position 4"
    assert missing.status == "noop"
    assert missing.message == "Word not found"


def test_display_renders_every_line() -> None:
    context = make_context("first", "")

    result = run(context, "display")

    assert result.lines == (
        "Buffer contents (2/25 lines):",
        "Line No1: first",
        "Line No2: (empty)",
    )


def test_display_empty_buffer() -> None:
    context = make_context("only")
    run(context, "delete 1")

    result = run(context, "display")

    assert result.render() == "Buffer is empty"


def test_update_and_invalid_update() -> None:
    context = make_context("hello world")

    ok = run(context, "update 1 6 there")
    bad = run(context, "update 4 0 nope")
    untouched = run(context, "update 1 99 tail")

    assert ok.message == "Line 1 updated successfully"
    assert context.buffer.lines == ("hello there",)
    assert bad.failed and bad.message == "Error: Invalid line number"
    assert untouched.status == "noop"


def test_delete_reports_size_and_rejects_bad_line() -> None:
    context = make_context("a", "b")

    ok = run(context, "delete 1")
    bad = run(context, "delete 9")

    assert ok.message == "Line deleted successfully. Buffer size: 1/25"
    assert bad.failed
    assert context.buffer.lines == ("b",)


def test_word_commands() -> None:
    context = make_context("the quick fox")

    inserted = run(context, "insertword 1 4 very")
    replaced = run(context, "replace fox dog")
    erased = run(context, "erase very")
    missing_line = run(context, "insertword 5 0 x")

    assert inserted.status == "ok"
    assert replaced.message == "Replaced 'fox' with 'dog' on line 1"
    assert erased.status == "ok"
    assert context.buffer.lines == ("the quick dog",)
    assert missing_line.status == "noop"


def test_undo_redo_messages() -> None:
    context = make_context()

    assert run(context, "undo").message == "Nothing to undo"
    run(context, "insert 1 a")
    assert run(context, "undo").message == "Undo performed. Buffer size: 0/25"
    assert run(context, "redo").message == "Redo performed. Buffer size: 1/25"
    assert run(context, "redo").message == "Nothing to redo"


def test_unknown_command_is_error() -> None:
    context = make_context()
    errors: List[object] = []
    context.bus.subscribe("command.error", errors.append)

    result = execute(context, "frobnicate", {})

    assert result.failed
    assert result.message == "Invalid command"
    assert errors == ["frobnicate"]


def test_missing_argument_is_error() -> None:
    context = make_context()

    result = execute(context, "delete", {})

    assert result.failed
    assert "Missing argument 'line'" in (result.message or "")


def test_exit_aliases() -> None:
    context = make_context()

    assert run(context, "exit").exit
    assert run(context, "quit").exit
    assert run(context, "q").exit


def test_help_lists_every_command() -> None:
    result = run(make_context(), "help")

    names = [line.split()[0] for line in result.lines]
    assert names[:3] == ["insert", "search", "display"]
    assert "exit" in names


def test_bus_receives_buffer_changes() -> None:
    context = make_context()
    changes: List[object] = []
    context.bus.subscribe("buffer.changed", changes.append)

    run(context, "insert 1 a")
    run(context, "search a")

    assert len(changes) == 1


def test_render_line_marks_empty_lines() -> None:
    assert render_line(0, "") == "Line No1: (empty)"
    assert render_line(9, "x") == "Line No10: x"


def test_render_buffer_empty_view() -> None:
    assert render_buffer(CommandContext.create().buffer.view()) == ("Buffer is empty",)


def test_coerce_arguments_checks_line_against_capacity() -> None:
    spec = lookup("insert")
    assert spec is not None

    with pytest.raises(CommandArgumentError) as excinfo:
        coerce_arguments(spec, {"line": "30", "text": "x"}, 25)

    assert str(excinfo.value) == "Line number must be between 1 and 25"
    assert coerce_arguments(spec, {"line": "25", "text": "x"}, 25)["line"] == 25


@pytest.mark.parametrize("start", ["-1", "12"])
def test_update_reports_start_outside_line(start: str) -> None:
    context = make_context("hello world")

    result = run(context, f"update 1 {start} tail")

    assert result.status == "noop"
    assert result.message == (
        "Line 1 unchanged: start position must be between 0 and 11"
    )
    assert context.buffer.lines == ("hello world",)


def test_update_with_identical_text_reports_identical() -> None:
    context = make_context("hello world")

    result = run(context, "update 1 6 world")

    assert result.message == "Line 1 unchanged: text is identical"


def test_rejected_commands_log_below_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    from line_editor.runtime import telemetry

    levels: List[str] = []
    monkeypatch.setattr(
        telemetry, "_emit", lambda logger, level, message, payload: levels.append(level)
    )
    context = make_context("a")

    results = [run(context, "delete 9"), run(context, "insert 30 x")]

    assert all(result.failed for result in results)
    assert levels
    assert not {"warning", "error"} & set(levels)

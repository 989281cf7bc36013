from __future__ import annotations

import io
from typing import Iterable, List

import pytest

from line_editor import cli
from line_editor.commands import CommandContext


def scripted(answers: Iterable[str], prompts: List[str]):
    queue = list(answers)

    def read_line(prompt: str) -> str:
        prompts.append(prompt)
        if not queue:
            raise EOFError
        return queue.pop(0)

    return read_line


def run_script(*answers: str, context: CommandContext | None = None):
    context = context or CommandContext.create()
    prompts: List[str] = []
    out, err = io.StringIO(), io.StringIO()
    code = cli.run_repl(
        context,
        read_line=scripted(answers, prompts),
        stdout=out,
        stderr=err,
    )
    return code, context, prompts, out.getvalue(), err.getvalue()


def test_repl_prompts_for_missing_arguments() -> None:
    code, context, prompts, out, _ = run_script(
        "insert", "2", "hello there", "display", "exit"
    )

    assert code == 0
    assert "Enter line number (1-25): " in prompts
    assert "Enter text: " in prompts
    assert context.buffer.lines == ("", "hello there")
    assert "Line No2: hello there" in out
    assert out.startswith("Line Editor Started (In-Memory Mode)")


def test_repl_accepts_inline_arguments() -> None:
    code, context, prompts, out, _ = run_script("insert 1 inline text", "exit")

    assert code == 0
    assert context.buffer.lines == ("inline text",)
    assert "Enter text: " not in prompts
    assert "Buffer size: 1/25" in out


def test_repl_reports_errors_and_continues() -> None:
    code, context, _, out, err = run_script(
        "delete 3", "bogus", "update x 0 t", "undo", "exit"
    )

    assert code == 0
    assert "Error: Invalid line number" in err
    assert "Invalid command" in err
    assert "whole number" in err
    assert "Nothing to undo" in out
    assert context.buffer.lines == ()


def test_repl_exits_cleanly_on_eof() -> None:
    code, _, _, out, _ = run_script("insert 1 a")

    assert code == 0
    assert "Line inserted successfully" in out


def test_main_rejects_invalid_limits(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--max-lines", "0"]) == 2
    assert "max_lines" in capsys.readouterr().err


def test_main_runs_repl_with_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: List[CommandContext] = []

    def fake_repl(context: CommandContext) -> int:
        seen.append(context)
        return 0

    monkeypatch.setattr(cli, "run_repl", fake_repl)

    assert cli.main(["--max-lines", "10", "--undo-limit", "5"]) == 0
    assert seen[0].buffer.capacity == 10
    assert seen[0].buffer.history.limit == 5


def test_repl_rejects_bad_insert_line_before_asking_for_text() -> None:
    code, context, prompts, _, err = run_script("insert", "30", "exit")

    assert code == 0
    assert "Enter text: " not in prompts
    assert "Error: Line number must be between 1 and 25" in err
    assert context.buffer.lines == ()


def test_repl_prompted_word_takes_first_token() -> None:
    context = CommandContext.create()
    context.buffer.insert_line(0, "cat dog")

    _, _, prompts, out, _ = run_script("search", "dog cat", "exit", context=context)

    assert "Enter word to search: " in prompts
    assert "Found at line 1, position 4" in out


def test_repl_prompted_text_keeps_whole_line() -> None:
    _, context, _, _, _ = run_script("insert", "1 extra", "two  words", "exit")

    assert context.buffer.lines == ("two  words",)

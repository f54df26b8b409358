# tests/core/test_core_commands.py
import json

import pytest
from prompt_toolkit.history import FileHistory

from terminal_shell.core.errors import (
    ArityError,
    InvalidFileTypeError,
    InvalidNameError,
    InvalidOperationError,
    ParamTypeError,
    UnknownCommandError,
)
from terminal_shell.handlers.core.jobs_handler import UNHEALTHY_WARNING
from terminal_shell.handlers.core.load_handler import resource_kind


# --- help ---

def test_help_lists_every_command(ctx, run):
    run("help")
    assert len(ctx.screen.html) == len(ctx.engine.registry)
    assert ctx.screen.html[0] == "<b>alias</b> - <i>Create aliases</i>"
    assert ctx.screen.lines == []


def test_help_for_a_command(ctx, run):
    run("help repeat")
    lines = ctx.screen.lines
    assert lines[0].startswith("Repeat a command N times")
    assert "Syntax: repeat <INT: TIMES> <STRING: COMMAND>" in lines
    assert 'Example: repeat 20 print "Example Partner #$INTITER"' in lines


def test_help_for_a_deprecated_name(ctx, run):
    run("help echo")
    assert ctx.screen.html == [
        "<ansiyellow>'echo' is a deprecated name, please use 'print' instead</ansiyellow>"
    ]
    assert "Syntax: print <STRING: MSG>" in ctx.screen.lines
    assert "Aliases: echo" in ctx.screen.lines


def test_help_for_an_unknown_command(run):
    with pytest.raises(UnknownCommandError):
        run("help nope")


# --- clear ---

def test_clear_screen_by_default(ctx, run):
    run("print something")
    run("clear")
    assert ctx.screen.cleaned == 1
    assert ctx.screen.lines == []


def test_clear_history(ctx, run):
    history_file = ctx.host.history_manager.history_file
    history = FileHistory(str(history_file))
    history.store_string("print one")
    history.store_string("print two")
    assert ctx.host.history_manager.count() == 2

    run("clear history")
    assert ctx.host.history_manager.count() == 0
    assert ctx.screen.cleaned == 0


# --- print ---

def test_print_joins_tokens_with_single_spaces(ctx, run):
    assert run("print Hello,   World") == "Hello, World"
    assert ctx.screen.lines == ["Hello, World"]


def test_print_leaves_positional_placeholders_alone(ctx, run):
    run("print Hello, $1")
    assert ctx.screen.lines == ["Hello, $1"]


def test_print_without_arguments_prints_empty_line(ctx, run):
    assert run("print") == ""
    assert ctx.screen.lines == [""]


# --- alias ---

def test_alias_with_positional_parameter(ctx, run):
    run('alias greet print "Hello, $1!"')
    assert ctx.screen.lines == ["Alias created successfully"]
    assert ctx.engine.aliases.get("greet") == 'print "Hello, $1!"'

    run("greet World")
    assert ctx.screen.lines[-1] == "Hello, World!"


def test_alias_listing(ctx, run):
    run("alias")
    assert ctx.screen.lines == ["No aliases defined."]

    run("alias hi print hi")
    result = run("alias")
    assert result == {"hi": "print hi"}
    assert ctx.screen.html == [" - hi  <i>print hi</i>"]


def test_alias_removal(ctx, run):
    run("alias hi print hi")
    assert run("alias hi") == {}
    assert ctx.screen.lines[-1] == "Alias removed successfully"


def test_alias_cannot_shadow_a_command(ctx, run):
    with pytest.raises(InvalidNameError):
        run("alias print help")
    assert ctx.engine.aliases.all() == {}


def test_alias_survives_a_storage_failure(ctx, run, monkeypatch):
    def failing_save(data):
        raise OSError("read-only")

    monkeypatch.setattr(ctx.engine.aliases._storage, "_save", failing_save)
    run("alias hi print hi")
    assert "read-only" in ctx.screen.errors[0]
    assert ctx.screen.lines == ["Alias created successfully"]
    assert run("hi") == "hi"


# --- load ---

def test_load_script(run, loader):
    assert run("load https://example.com/libs/extra.js") == "loaded https://example.com/libs/extra.js"
    assert loader.scripts == ["https://example.com/libs/extra.js"]


def test_load_stylesheet(run, loader):
    run("load https://example.com/theme.css?v=2")
    assert loader.stylesheets == ["https://example.com/theme.css?v=2"]
    assert loader.scripts == []


def test_load_rejects_other_file_types(ctx, run, loader):
    with pytest.raises(InvalidFileTypeError, match="Invalid file type"):
        run("load https://example.com/readme.txt")
    assert loader.scripts == []
    assert loader.stylesheets == []


@pytest.mark.parametrize("url, kind", [
    ("a.js", "script"),
    ("https://cdn.example.com/A.JS", "script"),
    ("/static/site.css", "stylesheet"),
])
def test_resource_kind(url, kind):
    assert resource_kind(url) == kind


# --- context_term ---

def test_context_term_read_write_set(ctx, run):
    assert run("context_term") == {}
    assert run("context_term write \"{'a': 1}\"") == {"a": 1}
    assert run("context_term write '{\"b\": 2}'") == {"a": 1, "b": 2}
    assert run("context_term set \"{'c': 3}\"") == {"c": 3}
    assert run("context_term read") == {"c": 3}
    assert ctx.screen.lines[-1] == {"c": 3}


def test_context_term_invalid_operation(run):
    with pytest.raises(InvalidOperationError, match="Invalid operation"):
        run("context_term delete")


def test_context_term_write_needs_values(run):
    with pytest.raises(ArityError):
        run("context_term write")


def test_context_term_write_needs_a_mapping(run):
    with pytest.raises(ParamTypeError):
        run("context_term write [1,2]")


def test_context_term_result_is_a_copy(ctx, run):
    result = run("context_term write \"{'a': 1}\"")
    result["b"] = 2
    assert ctx.terminal_context.read() == {"a": 1}


# --- quit / jobs ---

def test_quit_hides_host(ctx, run):
    assert ctx.host.visible
    run("quit")
    assert not ctx.host.visible


def test_jobs_lists_itself(ctx, run):
    assert run("jobs") == ["jobs"]
    assert ctx.screen.html == ["jobs <i></i>"]


def test_jobs_marks_unhealthy_jobs(ctx, run):
    job = ctx.engine.jobs.track(ctx.engine.reader.parse(
        "repeat", "100 print x", ctx.engine.registry.resolve("repeat").definition
    ))
    job.healthy = False
    run("jobs")
    assert ctx.screen.html[0] == f"repeat <i>100 print x</i> {UNHEALTHY_WARNING}"
    ctx.engine.jobs.release(job)


def test_jobs_output_is_escaped(ctx, run):
    job = ctx.engine.jobs.track(ctx.engine.reader.parse(
        "print", "<b>bold</b>", ctx.engine.registry.resolve("print").definition
    ))
    run("jobs")
    assert "print <i>&lt;b&gt;bold&lt;/b&gt;</i>" in ctx.screen.html
    ctx.engine.jobs.release(job)


def test_context_value_is_json_serializable(ctx, run):
    run("context_term write \"{'nested': {'x': [1, 2]}}\"")
    assert json.loads(json.dumps(ctx.terminal_context.read())) == {"nested": {"x": [1, 2]}}


# --- backslashes ---

def test_print_keeps_backslashes(ctx, run):
    assert run(r"print C:\temp\new") == r"C:\temp\new"


def test_alias_definition_is_stored_verbatim(ctx, run):
    run(r"alias win print C:\Users\$1")
    assert ctx.engine.aliases.get("win") == r"print C:\Users\$1"
    assert run("win bob") == r"C:\Users\bob"

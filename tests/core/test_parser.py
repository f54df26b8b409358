# tests/core/test_parser.py
import random
import re

import pytest

from terminal_shell.core.errors import ArityError, ParamTypeError
from terminal_shell.core.parser import (
    ArgumentSignature,
    ParameterGenerator,
    ParameterReader,
    sanitize,
    stringify,
    tokenize,
)
from terminal_shell.model import CommandDefinition


def make_definition(args: str, **kwargs) -> CommandDefinition:
    return CommandDefinition(definition="test", callback=lambda ctx, *a: None, args=args, **kwargs)


@pytest.fixture
def reader():
    return ParameterReader()


# --- Signatures ---

def test_signature_optional_marker_applies_to_following_slots():
    sig = ArgumentSignature.from_spec("s?sj")
    assert [s.optional for s in sig.slots] == [False, True, True]
    assert sig.required_count == 1
    assert not sig.variadic


def test_signature_variadic_tail():
    sig = ArgumentSignature.from_spec("i*")
    assert sig.variadic
    assert sig.required_count == 1
    assert [s.kind for s in sig.positional] == ["i"]


def test_empty_signature():
    sig = ArgumentSignature.from_spec("")
    assert sig.slots == ()
    assert sig.required_count == 0


@pytest.mark.parametrize("signature", ["x", "*s", "s**"])
def test_invalid_signature_raises_value_error(signature):
    with pytest.raises(ValueError):
        ArgumentSignature.from_spec(signature)


# --- Tokenizing, sanitizing, stringifying ---

def test_tokenize_honours_quotes():
    assert tokenize('print "a  b" c') == ["print", "a  b", "c"]
    assert tokenize("write \"{'a': 1}\"") == ["write", "{'a': 1}"]


def test_tokenize_unbalanced_quotes_falls_back_to_whitespace():
    assert tokenize('say "hello') == ["say", '"hello']


def test_tokenize_empty():
    assert tokenize("   ") == []


def test_sanitize_collapses_whitespace_and_normalizes_quotes():
    assert sanitize("  a \n\t b  “x” ‘y’ ") == "a b \"x\" 'y'"


def test_stringify_quotes_only_when_needed():
    assert stringify(["print", "Hello, $1!"]) == 'print "Hello, $1!"'
    assert stringify(["plain", 3]) == "plain 3"
    assert stringify([{"a": 1}]) == "'{\"a\": 1}'"
    assert stringify(["C:\\Users\\$1"]) == "C:\\Users\\$1"


def test_tokenize_keeps_backslashes():
    assert tokenize(r"C:\temp\new") == [r"C:\temp\new"]
    assert tokenize(r'"C:\Program Files\x" \n') == [r"C:\Program Files\x", r"\n"]


def test_tokenize_reverses_stringify():
    tokens = ["print", 'say "hi"', "back\\slash", "it's", 'both \' and "', "", "x"]
    assert tokenize(stringify(tokens)) == tokens


# --- Generators ---

def test_intiter_counts_per_generator():
    gen = ParameterGenerator()
    assert gen.expand("#$INTITER #$INTITER") == "#1 #2"
    assert ParameterGenerator().expand("$INTITER[5] $INTITER") == "5 6"


def test_positional_placeholders_are_not_generators():
    assert ParameterGenerator().expand("Hello, $1 and $2") == "Hello, $1 and $2"


def test_int_and_str_generators_respect_bounds():
    gen = ParameterGenerator(rng=random.Random(42))
    assert gen.expand("$INT[3,3]") == "3"
    assert 0 <= int(gen.expand("$INT[7]")) <= 7
    assert re.fullmatch(r"[A-Za-z]{4}", gen.expand("$STR[4,4]"))


def test_invalid_generator_bounds_raise_param_type_error():
    with pytest.raises(ParamTypeError):
        ParameterGenerator().expand("$INT[5,1]")


def test_date_and_uuid_generators():
    gen = ParameterGenerator()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", gen.expand("$DATE"))
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", gen.expand("$TIME"))
    assert re.fullmatch(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[0-9a-f]{4}-[0-9a-f]{12}", gen.expand("$UUID"))
    assert gen.expand("$NOW").isdigit()


# --- ParameterReader ---

def test_parse_coerces_types_and_collects_variadic(reader):
    parsed = reader.parse("repeat", "3 print   x", make_definition("i*"))
    assert parsed.cmd == "repeat"
    assert parsed.params == (3, ["print", "x"])
    assert parsed.raw_params == "3 print   x"
    assert parsed.command_text == "repeat 3 print   x"


def test_parse_optional_slots_may_be_missing(reader):
    assert reader.parse("help", "", make_definition("?s")).params == ()
    assert reader.parse("help", "repeat", make_definition("?s")).params == ("repeat",)


def test_parse_too_few_arguments(reader):
    with pytest.raises(ArityError):
        reader.parse("load", "", make_definition("s"))


def test_parse_too_many_arguments(reader):
    with pytest.raises(ArityError):
        reader.parse("load", "a b", make_definition("s"))


def test_parse_int_type_error(reader):
    with pytest.raises(ParamTypeError, match="INT"):
        reader.parse("repeat", "abc print x", make_definition("i*"))


@pytest.mark.parametrize("raw, expected", [
    ("write \"{'a': 1}\"", {"a": 1}),
    ("write '{\"b\": [1, 2]}'", {"b": [1, 2]}),
    ("write [1,2]", [1, 2]),
])
def test_parse_structured_values(reader, raw, expected):
    parsed = reader.parse("context_term", raw, make_definition("?sj"))
    assert parsed.params == ("write", expected)


@pytest.mark.parametrize("token", ["5", "not-a-dict", "__import__('os')"])
def test_parse_structured_rejects_non_containers(reader, token):
    with pytest.raises(ParamTypeError):
        reader.parse("context_term", f"write {token}", make_definition("?sj"))


def test_unsanitized_definition_keeps_inner_whitespace(reader):
    raw = '"a   b"'
    assert reader.parse("x", raw, make_definition("*", sanitized=False)).params == (["a   b"],)
    assert reader.parse("x", raw, make_definition("*")).params == (["a b"],)


def test_generators_only_expand_when_enabled(reader):
    gen = ParameterGenerator()
    enabled = reader.parse("print", "$INTITER", make_definition("*"), gen)
    disabled = reader.parse("repeat", "$INTITER", make_definition("*", generators=False), gen)
    assert enabled.params == (["1"],)
    assert disabled.params == (["$INTITER"],)

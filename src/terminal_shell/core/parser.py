# src/terminal_shell/core/parser.py
from __future__ import annotations

import ast
import json
import random
import re
import shlex
import string
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any, Iterable, List, Optional, Tuple

from terminal_shell.core.errors import ArityError, ParamTypeError
from terminal_shell.model import CommandDefinition, ParsedCommand

# Argument type tags accepted in a signature string, with their help labels.
TYPE_LABELS = {
    "s": "STRING",
    "i": "INT",
    "j": "DICT",
    "*": "STRING...",
}
_OPTIONAL_MARK = "?"

_QUOTE_TRANSLATION = str.maketrans({
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
})
_WHITESPACE_PATTERN = re.compile(r"\s+")
# Tokens matching this must be quoted to survive another tokenize() pass
_NEEDS_QUOTES_PATTERN = re.compile(r"[\s\"']")
_DOUBLE_QUOTE_RUNS = re.compile(r'("+)')
# Generator placeholders: $NAME or $NAME[options]. Positional $1..$N never match.
GENERATOR_PATTERN = re.compile(
    r"\$(INTITER|INT|STR|DATETIME|DATE|TIME|NOW|UUID)(?![A-Za-z0-9_])(?:\[([^\]]*)\])?"
)


@dataclass(frozen=True)
class Slot:
    """One argument position of a command signature."""
    kind: str
    optional: bool

    @property
    def variadic(self) -> bool:
        return self.kind == "*"


@dataclass(frozen=True)
class ArgumentSignature:
    """
    A compiled argument signature.

    The compact form is a sequence of type tags ('s', 'i', 'j') optionally
    ending with '*' (rest of input). A '?' makes every following slot
    optional: "?sj" takes zero to two arguments, "i*" an integer plus any
    number of trailing tokens.
    """
    slots: Tuple[Slot, ...]

    @classmethod
    def from_spec(cls, spec: str) -> "ArgumentSignature":
        return _compile_signature(spec or "")

    @property
    def positional(self) -> Tuple[Slot, ...]:
        return tuple(s for s in self.slots if not s.variadic)

    @property
    def variadic(self) -> bool:
        return bool(self.slots) and self.slots[-1].variadic

    @property
    def required_count(self) -> int:
        return sum(1 for s in self.positional if not s.optional)


@lru_cache(maxsize=None)
def _compile_signature(spec: str) -> ArgumentSignature:
    slots: List[Slot] = []
    optional = False
    for ch in spec:
        if ch == _OPTIONAL_MARK:
            optional = True
            continue
        if ch not in TYPE_LABELS:
            raise ValueError(f"Unknown argument type '{ch}' in signature '{spec}'")
        if slots and slots[-1].variadic:
            raise ValueError(f"Variadic slot must be the last one in signature '{spec}'")
        slots.append(Slot(kind=ch, optional=optional))
    return ArgumentSignature(tuple(slots))


def tokenize(raw: str) -> List[str]:
    """
    Splits a raw parameter string into tokens, honouring single and double
    quotes. Backslashes are ordinary characters (C:\\temp stays C:\\temp).
    Falls back to plain whitespace splitting when the quoting is unbalanced.
    """
    s = (raw or "").strip()
    if not s:
        return []
    lexer = shlex.shlex(s, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.escape = ""
    try:
        return list(lexer)
    except ValueError:
        return s.split()


def sanitize(raw: str) -> str:
    """Normalizes typographic quotes and collapses whitespace (incl. line breaks)."""
    normalized = (raw or "").translate(_QUOTE_TRANSLATION)
    return _WHITESPACE_PATTERN.sub(" ", normalized).strip()


def _quote(token: str) -> str:
    if token and not _NEEDS_QUOTES_PATTERN.search(token):
        return token
    if '"' not in token:
        return f'"{token}"'
    if "'" not in token:
        return f"'{token}'"
    # Both quote kinds: runs of double quotes go single-quoted, the rest double-quoted
    return "".join(
        f"'{part}'" if part.startswith('"') else f'"{part}"'
        for part in _DOUBLE_QUOTE_RUNS.split(token) if part
    )


def stringify(values: Iterable[Any]) -> str:
    """
    Rebuilds a raw command line from already split values. The inverse of
    tokenize(): tokenize(stringify(tokens)) == tokens.
    """
    parts = []
    for value in values:
        if isinstance(value, (dict, list, tuple)):
            parts.append(_quote(json.dumps(value)))
        else:
            parts.append(_quote(str(value)))
    return " ".join(parts)


class ParameterGenerator:
    """
    Expands generator placeholders ($INTITER, $INT[min,max], $STR[min,max],
    $DATE, $TIME, $DATETIME, $NOW, $UUID) in a raw parameter string.

    One instance lives for a whole top-level submission, so nested
    invocations (e.g. every iteration of 'repeat') share the $INTITER counter.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._int_iter: Optional[int] = None

    def expand(self, text: str) -> str:
        return GENERATOR_PATTERN.sub(self._replace, text)

    def next_iter(self, start: int = 1) -> int:
        self._int_iter = start if self._int_iter is None else self._int_iter + 1
        return self._int_iter

    def _replace(self, match: re.Match) -> str:
        name, raw_options = match.group(1), match.group(2)
        options = [o.strip() for o in raw_options.split(",")] if raw_options else []
        try:
            if name == "INTITER":
                return str(self.next_iter(int(options[0]) if options else 1))
            if name == "INT":
                low, high = self._bounds(options, 0, 100)
                return str(self._rng.randint(low, high))
            if name == "STR":
                low, high = self._bounds(options, 8, 8)
                length = self._rng.randint(low, high)
                return "".join(self._rng.choice(string.ascii_letters) for _ in range(length))
        except ValueError as e:
            raise ParamTypeError(f"Invalid generator '{match.group(0)}': {e}") from e

        now = datetime.now()
        if name == "DATE":
            return now.strftime("%Y-%m-%d")
        if name == "TIME":
            return now.strftime("%H:%M:%S")
        if name == "DATETIME":
            return now.strftime("%Y-%m-%d %H:%M:%S")
        if name == "NOW":
            return str(int(time.time()))
        return str(uuid.uuid4())

    @staticmethod
    def _bounds(options: List[str], default_low: int, default_high: int) -> Tuple[int, int]:
        if not options:
            return default_low, default_high
        if len(options) == 1:
            low, high = 0, int(options[0])
        else:
            low, high = int(options[0]), int(options[1])
        if low > high:
            raise ValueError(f"min {low} is greater than max {high}")
        return low, high


class ParameterReader:
    """Turns raw parameter text into typed arguments for a command definition."""

    def parse(
            self,
            cmd: str,
            raw_params: str,
            definition: CommandDefinition,
            generator: Optional[ParameterGenerator] = None,
    ) -> ParsedCommand:
        """
        Sanitizes (if enabled), expands generators (if enabled), tokenizes and
        coerces `raw_params` against `definition.args`.

        Raises:
            ArityError: Missing required arguments or unexpected extra ones.
            ParamTypeError: A token that cannot be coerced to its slot type.
        """
        text = raw_params or ""
        if definition.sanitized:
            text = sanitize(text)
        if definition.generators and generator is not None:
            text = generator.expand(text)

        signature = ArgumentSignature.from_spec(definition.args)
        params = self.coerce(tokenize(text), signature, cmd)
        return ParsedCommand(cmd=cmd, raw_params=(raw_params or "").strip(), params=tuple(params))

    def coerce(self, tokens: List[str], signature: ArgumentSignature, cmd: str = "") -> List[Any]:
        positional = signature.positional
        if len(tokens) < signature.required_count:
            raise ArityError(
                f"Invalid arguments for '{cmd}': expected at least "
                f"{signature.required_count}, got {len(tokens)}"
            )
        if not signature.variadic and len(tokens) > len(positional):
            raise ArityError(
                f"Invalid arguments for '{cmd}': expected at most "
                f"{len(positional)}, got {len(tokens)}"
            )

        values: List[Any] = [
            self._coerce_token(slot.kind, token, index)
            for index, (slot, token) in enumerate(zip(positional, tokens), start=1)
        ]
        if signature.variadic:
            values.append(list(tokens[len(positional):]))
        return values

    def stringify(self, values: Iterable[Any]) -> str:
        return stringify(values)

    def _coerce_token(self, kind: str, token: str, position: int) -> Any:
        if kind == "i":
            try:
                return int(token)
            except ValueError:
                raise ParamTypeError(f"Argument #{position} must be an INT, got '{token}'") from None
        if kind == "j":
            return self._read_structured(token, position)
        return token

    @staticmethod
    def _read_structured(token: str, position: int) -> Any:
        """Reads a mapping/sequence literal (JSON or Python syntax), never executing code."""
        try:
            value = json.loads(token)
        except ValueError:
            try:
                value = ast.literal_eval(token)
            except (ValueError, SyntaxError, TypeError):
                raise ParamTypeError(f"Argument #{position} is not a valid DICT literal: {token}") from None
        if not isinstance(value, (dict, list)):
            raise ParamTypeError(f"Argument #{position} must be a DICT or LIST literal, got '{token}'")
        return value

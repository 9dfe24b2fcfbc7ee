"""
Violation records and the per-pass reporting sink.

Checks never format text themselves: they record a structured Violation and the
human-readable message is rendered from it only when the report is displayed
or serialized.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from rich.console import Console
from rich.text import Text

from .strings import preview, quote, rune_len
from .logging import log

MAX_LISTED_ALLOWED = 5

class ViolationKind(str, Enum):
    MISSING_KEY = "missing_key"
    WRONG_TYPE = "wrong_type"
    NULL_VALUE = "null_value"
    EMPTY_STRING = "empty_string"
    BLANK_STRING = "blank_string"
    NOT_ALLOWED = "not_allowed"
    INVALID_URL = "invalid_url"
    TOO_LONG = "too_long"
    OUT_OF_RANGE = "out_of_range"
    EMPTY_ARRAY = "empty_array"
    LENGTH_MISMATCH = "length_mismatch"
    BAD_ELEMENT = "bad_element"
    MISSING_FILE = "missing_file"
    EMPTY_FILE = "empty_file"
    PARSE_ERROR = "parse_error"

def _article(noun: str) -> str:
    return f"an {noun}" if noun[:1] in "aeiou" else f"a {noun}"

def _bounds(lo: int, hi: int, exact: str) -> str:
    if lo == hi:
        return exact
    return f"between {lo} and {hi} (inclusive)"

def _allowed_values(values) -> str:
    if len(values) > MAX_LISTED_ALLOWED:
        return "the allowed values"
    return "{" + ", ".join(f'"{v}"' for v in values) + "}"

@dataclass(frozen=True)
class Violation:
    """One reported problem. `path` is the source location (usually the file)."""
    kind: ViolationKind
    path: str
    field: str = ""
    expected: Any = None
    actual: Any = None
    detail: str = ""

    @property
    def message(self) -> str:
        k = self.kind
        f = self.field
        if k is ViolationKind.MISSING_KEY:
            return f"Missing key: {quote(f)}"
        if k is ViolationKind.WRONG_TYPE:
            msg = f"Not {_article(self.expected)}: {quote(f)}"
            return msg if self.actual is None else f"{msg}: {self.actual}"
        if k is ViolationKind.NULL_VALUE:
            return f"Value is `null`, but must be {_article(self.expected)}: {quote(f)}"
        if k is ViolationKind.EMPTY_STRING:
            return f"String is zero-length: {quote(f)}"
        if k is ViolationKind.BLANK_STRING:
            return f"String is whitespace-only: {quote(f)}"
        if k is ViolationKind.NOT_ALLOWED:
            return f"The value of `{f}` is `{self.actual}`, but it must be one of {_allowed_values(self.expected)}"
        if k is ViolationKind.INVALID_URL:
            return f"Not a valid URL: {self.actual}"
        if k is ViolationKind.TOO_LONG:
            return (f"The value of `{f}` that starts with `{preview(self.actual)}...` is "
                    f"{rune_len(self.actual)} characters, but must not exceed {self.expected} characters")
        if k is ViolationKind.OUT_OF_RANGE:
            lo, hi = self.expected
            return f"The value of `{f}` is `{self.actual}`, but it must be {_bounds(lo, hi, f'`{lo}`')}"
        if k is ViolationKind.EMPTY_ARRAY:
            return f"Array is empty: {quote(f)}"
        if k is ViolationKind.LENGTH_MISMATCH:
            lo, hi = self.expected
            return (f"The `{f}` array has length {self.actual}, but must have length "
                    f"{_bounds(lo, hi, f'of exactly {lo}')}")
        if k is ViolationKind.BAD_ELEMENT:
            msg = f"Array contains {self.detail}: {quote(f)}"
            return msg if self.actual is None else f"{msg}: {self.actual}"
        if k is ViolationKind.MISSING_FILE:
            return "Missing file"
        if k is ViolationKind.EMPTY_FILE:
            if self.expected == "[]":
                return "File is empty, but must contain at least the empty array, `[]`"
            return "File is empty"
        if k is ViolationKind.PARSE_ERROR:
            return "JSON parsing error"
        raise ValueError(f"unknown violation kind: {k}")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"kind": self.kind.value, "message": self.message, "path": self.path}
        if self.field:
            out["field"] = self.field
        if self.expected is not None:
            out["expected"] = list(self.expected) if isinstance(self.expected, tuple) else self.expected
        if self.actual is not None:
            out["actual"] = self.actual
        if self.detail:
            out["detail"] = self.detail
        return out

@dataclass
class Report:
    """Append-only sink of violations for a single validation pass."""
    violations: List[Violation] = field(default_factory=list)

    def add(self, violation: Violation) -> None:
        log().debug("%s: %s", violation.path, violation.message)
        self.violations.append(violation)

    def __iter__(self) -> Iterator[Violation]:
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)

    def messages(self) -> List[str]:
        return [v.message for v in self.violations]

    def to_dict(self) -> List[Dict[str, Any]]:
        return [v.to_dict() for v in self.violations]

    def render(self, console: Optional[Console] = None) -> None:
        console = console or Console()
        for v in self.violations:
            text = Text(f"  {v.message}", style="red")
            text.append(f"\n    {v.path}", style="dim")
            console.print(text)

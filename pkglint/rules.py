# -*- coding: utf-8 -*-
"""
Declarative rule files.

A rule file is YAML describing the shape a document must have. It is checked
against a local JSON Schema, then compiled into a tree of composed checks:

    fields:
      - {key: name, type: string, max_len: 64}
      - {key: port, type: integer, range: [0, 65535]}
      - key: authors
        type: array
        length: [1, 10]
        items: {type: object, fields: [{key: name, type: string}]}
    subdirs:
      dir: packages
      require: [package.json]
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

from .checks import (
    ANY_LENGTH,
    ElementCheck,
    all_true,
    has_array_of,
    has_array_of_strings,
    has_bool,
    has_integer,
    has_key,
    has_object,
    has_string,
    is_array_of,
    is_bool,
    is_integer,
    is_object,
    is_string,
)
from .logging import log
from .report import Report

# (document, path, report) -> verdict
FieldCheck = Callable[[Any, str, Report], bool]

class RuleError(ValueError):
    """Raised for a rule file that cannot be loaded or compiled."""

_OPT: Dict[str, Any] = {
    "allowed": {"type": "array", "minItems": 1, "items": {"type": "string"}},
    "url": {"type": "boolean"},
    "max_len": {"type": "integer", "minimum": 0},
    "range": {"$ref": "#/$defs/range"},
    "length": {"$ref": "#/$defs/range"},
    "fields": {"type": "array", "items": {"$ref": "#/$defs/field"}},
    "items": {"$ref": "#/$defs/element"},
}

_RULE_SCHEMA: Dict[str, Any] = {
  "title": "pkglint rule file",
  "type": "object",
  "additionalProperties": False,
  "properties": {
    "type": {"enum": ["object", "array"]},
    "fields": {"type": "array", "items": {"$ref": "#/$defs/field"}},
    "items": {"$ref": "#/$defs/element"},
    "length": {"$ref": "#/$defs/range"},
    "allow_empty": {"type": "boolean"},
    "subdirs": {
      "type": "object",
      "additionalProperties": False,
      "required": ["dir", "require"],
      "properties": {
        "dir": {"type": "string", "minLength": 1},
        "require": {"type": "array", "minItems": 1, "items": {"type": "string", "minLength": 1}}
      }
    }
  },
  "$defs": {
    "range": {
      "type": "array", "minItems": 2, "maxItems": 2,
      "items": {"type": "integer"}
    },
    "field": {
      "type": "object",
      "required": ["key", "type"],
      "properties": {
        "key": {"type": "string", "minLength": 1},
        "context": {"type": "string", "minLength": 1},
        "type": {"enum": ["string", "integer", "bool", "object", "array", "array_of_strings"]},
        "required": {"type": "boolean"},
        "allowed": _OPT["allowed"],
        "url": _OPT["url"],
        "max_len": _OPT["max_len"],
        "range": _OPT["range"],
        "length": _OPT["length"],
        "fields": _OPT["fields"],
        "items": _OPT["items"]
      },
      "additionalProperties": False
    },
    "element": {
      "type": "object",
      "required": ["type"],
      "properties": {
        "type": {"enum": ["string", "integer", "bool", "object"]},
        "allowed": _OPT["allowed"],
        "url": _OPT["url"],
        "max_len": _OPT["max_len"],
        "range": _OPT["range"],
        "fields": _OPT["fields"]
      },
      "additionalProperties": False
    }
  }
}

# options each type understands, besides key/type/required
_OPTIONS = {
    "string": {"allowed", "url", "max_len"},
    "integer": {"range"},
    "bool": set(),
    "object": {"fields"},
    "array": {"items", "length"},
    "array_of_strings": {"context"},
}

@dataclass
class SubdirRule:
    dir: Path
    require: List[str]

@dataclass
class Ruleset:
    """A compiled rule file."""
    check: FieldCheck
    root_type: str = "object"
    allow_empty: bool = False
    subdirs: Optional[SubdirRule] = None
    source: Optional[Path] = None
    field_count: int = 0

    def __call__(self, document: Any, path: str, report: Report) -> bool:
        return self.check(document, path, report)

def _as_int(value: Any, name: str, where: str) -> int:
    # YAML 10.0 passes the schema's "integer" type; bools and fractions do not belong here
    if isinstance(value, bool) or not float(value).is_integer():
        raise RuleError(f"{where}: {name} must be a whole number, got {value!r}")
    return int(value)

def _max_len(spec: Dict[str, Any], where: str) -> Optional[int]:
    if "max_len" not in spec:
        return None
    return _as_int(spec["max_len"], "max_len", where)

def _range(spec: Dict[str, Any], name: str, where: str) -> Optional[range]:
    if name not in spec:
        return None
    lo, hi = (_as_int(b, name, where) for b in spec[name])
    if lo > hi:
        raise RuleError(f"{where}: {name} [{lo}, {hi}] is empty")
    return range(lo, hi + 1)

def _check_options(spec: Dict[str, Any], where: str) -> None:
    t = spec["type"]
    extra = set(spec) - {"key", "type", "required"} - _OPTIONS[t]
    if extra:
        raise RuleError(f"{where}: option(s) {sorted(extra)} do not apply to type '{t}'")
    if t == "string" and "allowed" in spec and ("url" in spec or "max_len" in spec):
        raise RuleError(f"{where}: 'allowed' cannot be combined with 'url' or 'max_len'")
    if t == "string" and spec.get("url") and "max_len" in spec:
        raise RuleError(f"{where}: 'url' cannot be combined with 'max_len'")
    if t == "array" and "items" not in spec:
        raise RuleError(f"{where}: arrays need an 'items' rule")

def compile_fields(fields: List[Dict[str, Any]], where: str = "fields") -> FieldCheck:
    checks = [_compile_field(f, f"{where}[{i}]") for i, f in enumerate(fields)]

    def run(data: Any, path: str, report: Report) -> bool:
        return all_true([c(data, path, report) for c in checks])
    return run

def _compile_field(spec: Dict[str, Any], where: str) -> FieldCheck:
    _check_options(spec, where)
    key = spec["key"]
    t = spec["type"]
    req = spec.get("required", True)

    if t == "string":
        allowed = frozenset(spec.get("allowed", ()))
        url_like = spec.get("url", False)
        max_len = _max_len(spec, where)
        return lambda data, path, report: has_string(
            data, key, path, report, required=req, allowed=allowed, url_like=url_like, max_len=max_len)
    if t == "integer":
        allowed_range = _range(spec, "range", where)
        return lambda data, path, report: has_integer(
            data, key, path, report, required=req, allowed=allowed_range)
    if t == "bool":
        return lambda data, path, report: has_bool(data, key, path, report, required=req)
    if t == "array_of_strings":
        context = spec.get("context", "")
        return lambda data, path, report: has_array_of_strings(
            data, context, key, path, report, required=req)
    if t == "object":
        inner = compile_fields(spec.get("fields", []), f"{where}.fields")

        def check_object(data: Any, path: str, report: Report) -> bool:
            if not has_object(data, key, path, report, required=req):
                return False
            if has_key(data, key):
                return inner(data[key], path, report)
            return True
        return check_object
    if t == "array":
        element = compile_element(spec["items"], f"{where}.items")
        length = _range(spec, "length", where) or ANY_LENGTH
        return lambda data, path, report: has_array_of(
            data, key, path, element, report, required=req, allowed_length=length)
    raise RuleError(f"{where}: unknown type '{t}'")

def compile_element(spec: Dict[str, Any], where: str = "items") -> ElementCheck:
    _check_options(spec, where)
    t = spec["type"]

    if t == "string":
        allowed = frozenset(spec.get("allowed", ()))
        url_like = spec.get("url", False)
        max_len = _max_len(spec, where)
        return lambda value, context, path, report: is_string(
            value, context, path, report, allowed=allowed, url_like=url_like, max_len=max_len)
    if t == "integer":
        allowed_range = _range(spec, "range", where)
        return lambda value, context, path, report: is_integer(
            value, context, path, report, allowed=allowed_range)
    if t == "bool":
        return lambda value, context, path, report: is_bool(value, context, path, report)
    if t == "object":
        inner = compile_fields(spec.get("fields", []), f"{where}.fields")

        def check_item(value: Any, context: str, path: str, report: Report) -> bool:
            if is_object(value, context, path, report):
                return inner(value, path, report)
            return False
        return check_item
    raise RuleError(f"{where}: unknown element type '{t}'")

def compile_rules(spec: Dict[str, Any], source: Optional[Path] = None) -> Ruleset:
    """Validate a parsed rule mapping and compile it into a Ruleset."""
    if spec is None:
        spec = {}
    where = str(source) if source else "rules"
    errors = [f"{where}: {e.message} (at /{'/'.join(map(str, e.absolute_path))})"
              for e in Draft202012Validator(_RULE_SCHEMA).iter_errors(spec)]
    if errors:
        raise RuleError("; ".join(errors))

    root_type = spec.get("type", "object")
    allow_empty = spec.get("allow_empty", False)
    if root_type == "object":
        if "items" in spec or "length" in spec:
            raise RuleError(f"{where}: 'items' and 'length' need type: array")
        fields = compile_fields(spec.get("fields", []))

        def check(document: Any, path: str, report: Report) -> bool:
            if is_object(document, "", path, report):
                return fields(document, path, report)
            return False
    else:
        if "fields" in spec:
            raise RuleError(f"{where}: 'fields' needs type: object")
        if "items" not in spec:
            raise RuleError(f"{where}: arrays need an 'items' rule")
        element = compile_element(spec["items"])
        length = _range(spec, "length", where) or ANY_LENGTH

        def check(document: Any, path: str, report: Report) -> bool:
            return is_array_of(document, "", path, element, report,
                               required=not allow_empty, allowed_length=length)

    subdirs = None
    if "subdirs" in spec:
        sd = spec["subdirs"]
        subdirs = SubdirRule(dir=Path(sd["dir"]), require=list(sd["require"]))

    return Ruleset(check=check, root_type=root_type, allow_empty=allow_empty,
                   subdirs=subdirs, source=source, field_count=len(spec.get("fields", [])))

def load_rules(path: Path) -> Ruleset:
    """Load a YAML rule file; raises RuleError if it is missing or malformed."""
    path = Path(path)
    if not path.is_file():
        raise RuleError(f"rule file not found: {path}")
    try:
        spec = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RuleError(f"{path}: invalid YAML: {e}") from e
    rules = compile_rules(spec, source=path)
    log().debug("loaded %s (%d top-level fields)", path, rules.field_count)
    return rules

import pytest

from pkglint.report import Report
from pkglint.rules import RuleError, compile_rules, load_rules

def run(rules, doc):
    r = Report()
    ok = rules(doc, "pkg.json", r)
    return ok, r.messages()

def test_valid_document_passes(rules_file, valid_doc):
    rules = load_rules(rules_file)
    assert run(rules, valid_doc) == (True, [])

def test_every_problem_is_reported(rules_file, valid_doc):
    doc = dict(valid_doc)
    doc["name"] = ""
    doc["kind"] = "plugin"
    doc["homepage"] = "example.org"
    doc["port"] = 70000
    doc["tags"] = []
    doc["authors"] = [{"name": "  "}, "x"]
    doc["meta"] = {}
    ok, messages = run(load_rules(rules_file), doc)
    assert not ok
    assert messages == [
        "String is zero-length: 'name'",
        'The value of `kind` is `plugin`, but it must be one of {"application", "library"}',
        "Not a valid URL: example.org",
        "The value of `port` is `70000`, but it must be between 0 and 65535 (inclusive)",
        "Array is empty: 'tags'",
        "String is whitespace-only: 'name'",
        "Not an object: 'authors'",
        "Missing key: 'build'",
    ]

def test_root_must_be_object(rules_file):
    ok, messages = run(load_rules(rules_file), [])
    assert not ok
    assert messages == ["Not an object: root"]

def test_array_length_rule(rules_file, valid_doc):
    doc = dict(valid_doc, authors=[{"name": ""}] * 4)
    ok, messages = run(load_rules(rules_file), doc)
    assert not ok
    assert messages == ["The `authors` array has length 4, but must have length between 1 and 3 (inclusive)"]

def test_array_root():
    rules = compile_rules({"type": "array", "items": {"type": "string", "max_len": 3}, "allow_empty": True})
    assert rules.allow_empty
    assert run(rules, []) == (True, [])
    ok, messages = run(rules, ["abc", "abcd"])
    assert not ok
    assert messages == ["The value of `` that starts with `abcd...` is 4 characters, but must not exceed 3 characters"]

def test_nested_array_of_strings_context():
    rules = compile_rules({"fields": [{"key": "solution", "type": "array_of_strings", "context": "files"}]})
    ok, messages = run(rules, {"files": {"solution": ["", "a"]}})
    assert not ok
    assert messages == ["Array contains zero-length string: 'files.solution'"]

def test_subdirs_section(rules_file):
    rules = load_rules(rules_file)
    assert rules.subdirs is not None
    assert rules.subdirs.require == ["package.json"]
    assert rules.source == rules_file

@pytest.mark.parametrize("spec", [
    {"fields": [{"key": "x", "type": "float"}]},
    {"fields": [{"type": "string"}]},
    {"fields": [{"key": "x", "type": "string", "bogus": 1}]},
    {"fields": [{"key": "x", "type": "string", "range": [0, 1]}]},
    {"fields": [{"key": "x", "type": "integer", "range": [5, 1]}]},
    {"fields": [{"key": "x", "type": "array"}]},
    {"fields": [{"key": "x", "type": "string", "allowed": ["a"], "url": True}]},
    {"fields": [{"key": "x", "type": "string", "url": True, "max_len": 10}]},
    {"fields": [{"key": "x", "type": "integer", "range": [0, 10.5]}]},
    {"fields": [{"key": "x", "type": "array", "items": {"type": "bool"}, "length": [1, 2.5]}]},
    {"fields": [{"key": "x", "type": "string", "max_len": 2.5}]},
    {"type": "array"},
    {"type": "array", "items": {"type": "bool"}, "fields": []},
    {"items": {"type": "bool"}},
    {"unknown": True},
])
def test_invalid_rules_raise(spec):
    with pytest.raises(RuleError):
        compile_rules(spec)

def test_empty_rule_file_only_requires_an_object(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    rules = load_rules(p)
    assert run(rules, {"anything": 1}) == (True, [])

def test_missing_or_malformed_rule_file(tmp_path):
    with pytest.raises(RuleError):
        load_rules(tmp_path / "nope.yml")
    bad = tmp_path / "bad.yml"
    bad.write_text("fields: [\n", encoding="utf-8")
    with pytest.raises(RuleError):
        load_rules(bad)

def test_url_without_max_len_still_compiles():
    rules = compile_rules({"fields": [{"key": "homepage", "type": "string", "url": True}]})
    ok, messages = run(rules, {"homepage": "ftp://example.org"})
    assert not ok
    assert messages == ["Not a valid URL: ftp://example.org"]

def test_whole_float_bounds_are_read_as_integers(tmp_path, write_doc):
    from pkglint.cli import EXIT_CONFIG, EXIT_OK, EXIT_VIOLATIONS, main
    rules = tmp_path / "rules.yml"
    rules.write_text("fields: [{key: port, type: integer, range: [0, 10.0]}]\n", encoding="utf-8")
    assert main(["check", str(write_doc("ok.json", {"port": 10})), "--rules", str(rules)]) == EXIT_OK
    assert main(["check", str(write_doc("bad.json", {"port": 11})), "--rules", str(rules)]) == EXIT_VIOLATIONS
    rules.write_text("fields: [{key: port, type: integer, range: [0, 10.5]}]\n", encoding="utf-8")
    assert main(["check", str(write_doc("ok.json", {"port": 1})), "--rules", str(rules)]) == EXIT_CONFIG

def test_whole_float_length_and_max_len():
    rules = compile_rules({"fields": [
        {"key": "name", "type": "string", "max_len": 3.0},
        {"key": "flags", "type": "array", "items": {"type": "bool"}, "length": [1.0, 2.0]},
    ]})
    ok, messages = run(rules, {"name": "abcd", "flags": [True, False, True]})
    assert not ok
    assert messages == [
        "The value of `name` that starts with `abcd...` is 4 characters, but must not exceed 3 characters",
        "The `flags` array has length 3, but must have length between 1 and 2 (inclusive)",
    ]

from pkglint.checks import Verdict
from pkglint.io import parse_json_file, sorted_subdirs, subdirs_contain, write_json, read_json
from pkglint.report import ViolationKind

def test_parse_ok(report, write_doc):
    p = write_doc("pkg.json", {"name": "x"})
    v = Verdict(report)
    assert parse_json_file(p, v) == {"name": "x"}
    assert v.ok and len(report) == 0

def test_missing_file(report, tmp_path):
    v = Verdict(report)
    assert parse_json_file(tmp_path / "missing.json", v) is None
    assert not v.ok
    assert report.messages() == ["Missing file"]
    assert report.violations[0].path.endswith("missing.json")

def test_whitespace_only_file(report, write_doc):
    v = Verdict(report)
    assert parse_json_file(write_doc("e.json", text="  \n\t"), v) is None
    assert not v.ok
    assert report.messages() == ["File is empty"]

def test_empty_file_allow_empty_array(report, write_doc):
    v = Verdict(report)
    parse_json_file(write_doc("e.json", text=""), v, allow_empty_array=True)
    assert report.messages() == ["File is empty, but must contain at least the empty array, `[]`"]

def test_malformed_json(report, write_doc):
    v = Verdict(report)
    p = write_doc("bad.json", text='{"name": ')
    assert parse_json_file(p, v) is None
    assert not v.ok
    assert len(report) == 1
    rec = report.violations[0]
    assert rec.kind is ViolationKind.PARSE_ERROR
    assert rec.message == "JSON parsing error"
    assert str(p) in rec.path

def test_subdirs_contain(report, tmp_path):
    root = tmp_path / "packages"
    (root / "a").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "a" / "package.json").write_text("{}")
    (root / "README").write_text("not a dir")
    assert not subdirs_contain(root, ["package.json", "README.md"], report)
    missing = sorted(v.path for v in report)
    assert missing == sorted([
        str(root / "a" / "README.md"),
        str(root / "b" / "README.md"),
        str(root / "b" / "package.json"),
    ])
    assert set(report.messages()) == {"Missing file"}

def test_subdirs_contain_is_vacuous_for_absent_or_flat_dirs(report, tmp_path):
    assert subdirs_contain(tmp_path / "nope", ["x"], report)
    assert subdirs_contain(tmp_path, ["x"], report)
    assert len(report) == 0

def test_sorted_subdirs(tmp_path):
    for name in ["c", "a", "b"]:
        (tmp_path / name).mkdir()
    assert [p.name for p in sorted_subdirs(tmp_path)] == ["a", "b", "c"]

def test_write_then_read_json(tmp_path):
    p = tmp_path / "out" / "report.json"
    write_json(p, {"ok": True, "name": "ünïcode"})
    assert read_json(p) == {"ok": True, "name": "ünïcode"}

def test_invalid_utf8_is_a_parse_error(report, tmp_path):
    p = tmp_path / "binary.json"
    p.write_bytes(b"\xff")
    v = Verdict(report)
    assert parse_json_file(p, v) is None
    assert not v.ok
    assert [r.kind for r in report] == [ViolationKind.PARSE_ERROR]
    assert report.messages() == ["JSON parsing error"]

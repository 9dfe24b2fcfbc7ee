from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .checks.verdict import Verdict
from .report import Report, Violation, ViolationKind as K
from .strings import is_blank

def read_json(p: Path) -> Any:
    return json.loads(Path(p).read_text(encoding="utf-8"))

def write_json(p: Path, obj: Any) -> None:
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")

def parse_json_file(path: Path, verdict: Verdict, allow_empty_array: bool = False) -> Optional[Any]:
    """
    Parse the JSON file at `path`.

    Returns None and fails `verdict` with a single violation when the file is
    missing, blank, or not valid JSON.
    """
    path = Path(path)
    if not path.is_file():
        verdict.fail(Violation(K.MISSING_FILE, str(path)))
        return None
    try:
        contents = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        verdict.fail(Violation(K.PARSE_ERROR, f"{path}: {e}", detail=str(e)))
        return None
    if is_blank(contents):
        verdict.fail(Violation(K.EMPTY_FILE, str(path), expected="[]" if allow_empty_array else None))
        return None
    try:
        return json.loads(contents)
    except json.JSONDecodeError as e:
        verdict.fail(Violation(K.PARSE_ERROR, f"{path}({e.lineno}, {e.colno}) {e.msg}", detail=e.msg))
        return None

def sorted_subdirs(dir: Path) -> List[Path]:
    return sorted(p for p in Path(dir).iterdir() if p.is_dir())

def subdirs_contain(dir: Path, files: Iterable[str], report: Report) -> bool:
    """
    True if every file in `files` exists in every subdirectory of `dir`.

    Also true when `dir` does not exist or has no subdirectories.
    """
    v = Verdict(report)
    dir = Path(dir)
    if not dir.is_dir():
        return True
    files = list(files)
    for subdir in sorted_subdirs(dir):
        for name in files:
            path = subdir / name
            if not path.is_file():
                v.fail(Violation(K.MISSING_FILE, str(path)))
    return v.ok

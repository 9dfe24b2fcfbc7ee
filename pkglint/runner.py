from __future__ import annotations
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .checks.verdict import Verdict
from .io import parse_json_file, subdirs_contain
from .logging import log
from .report import Report, Violation
from .rules import Ruleset

@dataclass
class FileResult:
    path: Path
    ok: bool
    violations: List[Violation] = field(default_factory=list)
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path),
            "ok": self.ok,
            "error_count": len(self.violations),
            "duration_ms": self.duration_ms,
            "errors": [v.to_dict() for v in self.violations],
        }

def lint_file(path: Path, rules: Ruleset) -> FileResult:
    """One validation pass over one document, with its own report."""
    start = time.time()
    report = Report()
    verdict = Verdict(report)
    document = parse_json_file(path, verdict, allow_empty_array=rules.allow_empty)
    if verdict.ok:
        verdict.absorb(rules(document, str(path), report))
    duration_ms = round((time.time() - start) * 1000, 1)
    log().debug("%s %s (%d issue(s))", "ok" if verdict.ok else "FAIL", path, len(report))
    return FileResult(path=Path(path), ok=verdict.ok, violations=list(report), duration_ms=duration_ms)

def lint_files(paths: Iterable[Path], rules: Ruleset, jobs: int = 1) -> List[FileResult]:
    """Lint each document independently; results keep the input order."""
    paths = [Path(p) for p in paths]
    if jobs <= 1 or len(paths) <= 1:
        return [lint_file(p, rules) for p in paths]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda p: lint_file(p, rules), paths))

def lint_subdirs(dir: Path, require: Iterable[str]) -> FileResult:
    report = Report()
    ok = subdirs_contain(dir, require, report)
    log().debug("%s %s/* (%d missing file(s))", "ok" if ok else "FAIL", dir, len(report))
    return FileResult(path=Path(dir), ok=ok, violations=list(report))

def lint_tree(root: Path, rules: Ruleset) -> FileResult:
    """Apply the rule file's subdirs requirement below `root`."""
    if rules.subdirs is None:
        return FileResult(path=Path(root), ok=True)
    return lint_subdirs(Path(root) / rules.subdirs.dir, rules.subdirs.require)

def summarize(results: List[FileResult]) -> Dict[str, Any]:
    failed = [r for r in results if not r.ok]
    return {
        "ok": not failed,
        "checked": len(results),
        "failed": len(failed),
        "error_count": sum(len(r.violations) for r in results),
        "files": [r.to_dict() for r in results],
    }

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pkglint CLI

Usage:
  python -m pkglint check package.json other/package.json --rules rules.yml
  python -m pkglint subdirs packages --require package.json README.md
"""
from __future__ import annotations
import argparse, sys, time
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.text import Text

from .config import LintConfig
from .io import write_json
from .logging import log, set_verbosity
from .report import Report
from .rules import load_rules
from .runner import FileResult, lint_files, lint_subdirs, lint_tree, summarize

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_CONFIG = 2

console = Console()

def print_success(message: str):
    console.print(Text(f"✓ {message}", style="green"))

def print_failure(message: str):
    console.print(Text(f"✗ {message}", style="red bold"))

def print_error(message: str):
    console.print(Text(f"❌ {message}", style="red bold"))

def print_results(results: List[FileResult]) -> None:
    for r in results:
        if r.ok:
            print_success(str(r.path))
        else:
            print_failure(f"{r.path} ({len(r.violations)} issue(s))")
            Report(list(r.violations)).render(console)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pkglint", description="Structural validator for package metadata files")
    sub = ap.add_subparsers(dest="cmd", required=True)

    check = sub.add_parser("check", help="Validate JSON documents against a rule file")
    check.add_argument("files", nargs="+", help="JSON documents to validate")
    check.add_argument("--rules", help="YAML rule file (default: $PKGLINT_RULES)")
    check.add_argument("--report", help="Write a JSON report here (default: $PKGLINT_REPORT)")
    check.add_argument("--jobs", type=int, help="Documents to validate in parallel")
    check.add_argument("--verbose", action="store_true")

    subdirs = sub.add_parser("subdirs", help="Require files in every subdirectory of a directory")
    subdirs.add_argument("dir", help="Directory whose subdirectories are checked; with --rules, the root "
                         "that the rule file's subdirs.dir is resolved against")
    subdirs.add_argument("--require", nargs="+", help="File names each subdirectory must contain")
    subdirs.add_argument("--rules", help="Take the requirement from a rule file's 'subdirs' section")
    subdirs.add_argument("--report", help="Write a JSON report here")
    subdirs.add_argument("--verbose", action="store_true")
    return ap

def run_check(cfg: LintConfig, files: List[str]) -> int:
    if cfg.rules_path is None:
        print_error("no rule file: pass --rules or set PKGLINT_RULES")
        return EXIT_CONFIG
    rules = load_rules(cfg.rules_path)
    start = time.time()
    results = lint_files([Path(f) for f in files], rules, jobs=cfg.jobs)
    summary = summarize(results)
    print_results(results)
    if cfg.report_path:
        write_json(cfg.report_path, summary)
        log().info("report written to %s", cfg.report_path)

    duration_ms = (time.time() - start) * 1000
    if summary["ok"]:
        console.print(Text(f"✅ {summary['checked']} file(s) valid in {duration_ms:.0f}ms", style="green bold"))
        return EXIT_OK
    console.print(Text(f"{summary['failed']} of {summary['checked']} file(s) failed, "
                       f"{summary['error_count']} issue(s)", style="red bold"))
    return EXIT_VIOLATIONS

def run_subdirs(cfg: LintConfig, root: str, require: Optional[List[str]]) -> int:
    if require:
        result = lint_subdirs(Path(root), require)
    elif cfg.rules_path is not None:
        rules = load_rules(cfg.rules_path)
        if rules.subdirs is None:
            print_error(f"{cfg.rules_path} has no 'subdirs' section")
            return EXIT_CONFIG
        result = lint_tree(Path(root), rules)
    else:
        print_error("pass --require or a --rules file with a 'subdirs' section")
        return EXIT_CONFIG
    print_results([result])
    if cfg.report_path:
        write_json(cfg.report_path, summarize([result]))
    return EXIT_OK if result.ok else EXIT_VIOLATIONS

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_verbosity(args.verbose)
    try:
        cfg = LintConfig.from_env().override(
            rules=args.rules, report=args.report, jobs=getattr(args, "jobs", None))
        if args.cmd == "check":
            return run_check(cfg, args.files)
        return run_subdirs(cfg, args.dir, args.require)
    except ValueError as e:
        print_error(str(e))
        return EXIT_CONFIG

if __name__ == "__main__":
    sys.exit(main())

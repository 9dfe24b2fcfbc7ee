"""Structural validation for package-registry metadata files."""
from .checks import Verdict, all_true
from .report import Report, Violation, ViolationKind
from .rules import RuleError, Ruleset, compile_rules, load_rules
from .runner import FileResult, lint_file, lint_files, lint_tree

__version__ = "0.1.0"

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_JOBS = 1

@dataclass
class LintConfig:
    rules_path: Optional[Path]
    report_path: Optional[Path]
    jobs: int = DEFAULT_JOBS

    @staticmethod
    def from_env(env_file: Optional[Path] = None) -> "LintConfig":
        # .env never overrides variables already set in the environment
        dotenv_path = Path(env_file) if env_file else Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)

        rules = os.environ.get("PKGLINT_RULES")
        report = os.environ.get("PKGLINT_REPORT")
        jobs = os.environ.get("PKGLINT_JOBS", str(DEFAULT_JOBS))
        try:
            n_jobs = int(jobs)
        except ValueError:
            raise ValueError(f"PKGLINT_JOBS must be an integer, got {jobs!r}") from None
        if n_jobs < 1:
            raise ValueError(f"PKGLINT_JOBS must be at least 1, got {n_jobs}")
        return LintConfig(
            rules_path=Path(rules) if rules else None,
            report_path=Path(report) if report else None,
            jobs=n_jobs,
        )

    def override(self, rules: Optional[str] = None, report: Optional[str] = None,
                 jobs: Optional[int] = None) -> "LintConfig":
        """Return a copy with CLI flags taking precedence over the environment."""
        return LintConfig(
            rules_path=Path(rules) if rules else self.rules_path,
            report_path=Path(report) if report else self.report_path,
            jobs=jobs if jobs is not None else self.jobs,
        )

    def as_dict(self) -> dict:
        return {
            "rules": str(self.rules_path) if self.rules_path else None,
            "report": str(self.report_path) if self.report_path else None,
            "jobs": self.jobs,
        }

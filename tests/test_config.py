from pathlib import Path

import pytest

from pkglint.config import LintConfig

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("PKGLINT_RULES", "PKGLINT_REPORT", "PKGLINT_JOBS"):
        # setenv first so teardown also undoes values load_dotenv writes
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

def test_defaults():
    cfg = LintConfig.from_env()
    assert cfg.rules_path is None
    assert cfg.report_path is None
    assert cfg.jobs == 1

def test_from_env(monkeypatch):
    monkeypatch.setenv("PKGLINT_RULES", "rules.yml")
    monkeypatch.setenv("PKGLINT_JOBS", "3")
    cfg = LintConfig.from_env()
    assert cfg.rules_path == Path("rules.yml")
    assert cfg.jobs == 3

def test_dotenv_does_not_override_environment(monkeypatch, tmp_path):
    env = tmp_path / "custom.env"
    env.write_text("PKGLINT_REPORT=from-dotenv.json\nPKGLINT_JOBS=2\n")
    monkeypatch.setenv("PKGLINT_JOBS", "5")
    cfg = LintConfig.from_env(env)
    assert cfg.report_path == Path("from-dotenv.json")
    assert cfg.jobs == 5

@pytest.mark.parametrize("jobs", ["many", "0"])
def test_bad_jobs(monkeypatch, jobs):
    monkeypatch.setenv("PKGLINT_JOBS", jobs)
    with pytest.raises(ValueError):
        LintConfig.from_env()

def test_cli_flags_override():
    cfg = LintConfig(rules_path=Path("a.yml"), report_path=None, jobs=1)
    cfg = cfg.override(rules="b.yml", jobs=4)
    assert cfg.as_dict() == {"rules": "b.yml", "report": None, "jobs": 4}

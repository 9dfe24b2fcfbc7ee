"""Pytest configuration and fixtures for pkglint tests"""
import json
from pathlib import Path
import pytest

from pkglint.report import Report

@pytest.fixture
def report():
    """A fresh reporting sink for one validation pass"""
    return Report()

@pytest.fixture
def write_doc(tmp_path):
    """Write a JSON document (or raw text) under tmp_path and return its path"""
    def _write(name, obj=None, text=None):
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            text = json.dumps(obj, ensure_ascii=False)
        p.write_text(text, encoding="utf-8")
        return p
    return _write

@pytest.fixture
def rules_file(tmp_path):
    """A rule file exercising every field type"""
    p = tmp_path / "rules.yml"
    p.write_text('''
fields:
  - {key: name, type: string, max_len: 32}
  - {key: kind, type: string, allowed: [library, application]}
  - {key: homepage, type: string, url: true, required: false}
  - {key: port, type: integer, range: [0, 65535], required: false}
  - {key: private, type: bool, required: false}
  - {key: tags, type: array_of_strings}
  - key: authors
    type: array
    length: [1, 3]
    items:
      type: object
      fields:
        - {key: name, type: string}
        - {key: email, type: string, required: false}
  - key: meta
    type: object
    required: false
    fields:
      - {key: build, type: string}
subdirs:
  dir: packages
  require: [package.json]
''', encoding="utf-8")
    return p

@pytest.fixture
def valid_doc():
    return {
        "name": "left-pad",
        "kind": "library",
        "homepage": "https://example.org/left-pad",
        "port": 8080,
        "private": False,
        "tags": ["string", "padding"],
        "authors": [{"name": "A. Author", "email": "a@example.org"}],
        "meta": {"build": "make"},
    }

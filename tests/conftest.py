"""Pytest configuration and fixtures for vcheck tests."""

from __future__ import annotations

import os
import uuid
from pathlib import Path

# Rich reads these at console creation; pin them so table and error output
# is not wrapped or styled differently between terminals and CI.
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
os.environ.setdefault("TERM", "dumb")

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep tests independent of the developer's VCHECK_* variables and config files."""
    monkeypatch.delenv("VCHECK_CHECKERS", raising=False)
    monkeypatch.delenv("VCHECK_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))


CHECKER_MODULE_SOURCE = '''
from vcheck import (
    DocumentConformanceViolation,
    ObjectConformanceViolation,
    ValidationChecker,
)

CALLS = []


class PassingChecker(ValidationChecker):
    def validate_document(self, context):
        CALLS.append(("document", type(self).__name__))

    def validate_object(self, obj, key, resources, content_stream, extra):
        CALLS.append(("object", type(self).__name__))


class TitleChecker(PassingChecker):
    def validate_document(self, context):
        super().validate_document(context)
        if not (context.document or {}).get("title"):
            raise DocumentConformanceViolation("document has no title")


class OperatorChecker(PassingChecker):
    def validate_object(self, obj, key, resources, content_stream, extra):
        super().validate_object(obj, key, resources, content_stream, extra)
        if "BI" in str(obj):
            raise ObjectConformanceViolation("inline images are not allowed", key=key)


class CrashingChecker(PassingChecker):
    def validate_document(self, context):
        raise RuntimeError("checker bug")


class NeedsProfileChecker(PassingChecker):
    def __init__(self, profile):
        self.profile = profile


class NotAChecker:
    pass


SHARED = PassingChecker()
PLAIN_OBJECT = object()
'''


@pytest.fixture
def checker_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module of sample checkers and return its name.

    Each test gets a uniquely named module so CALLS starts empty.
    """
    module_name = f"sample_checkers_{uuid.uuid4().hex}"
    module_dir = tmp_path / "plugins"
    module_dir.mkdir()
    (module_dir / f"{module_name}.py").write_text(CHECKER_MODULE_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(module_dir))
    return module_name

"""Architectural boundary checks run as part of the test suite."""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / "utils" / "check_boundaries.py"


def _load_checks():
    spec = importlib.util.spec_from_file_location("check_boundaries", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


CHECK_MODULE = _load_checks()


@pytest.mark.parametrize(
    ("name", "check"), CHECK_MODULE.CHECKS, ids=[name for name, _ in CHECK_MODULE.CHECKS]
)
def test_boundary_check_passes(name, check) -> None:
    violations = check()
    assert not violations, CHECK_MODULE.format_violations(violations)

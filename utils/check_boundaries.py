#!/usr/bin/env python3
# ruff: noqa: T201
"""Architectural boundary validation for Household Dashboard.

Run standalone: python utils/check_boundaries.py
Exit code 0 = all checks pass, 1 = violations found

Checks:
1. Purity Boundary - No homeassistant.* imports in utils/ and engines/
2. Engine Constants - engines/ never import the integration's const module
3. Translation Constants - translation_key uses const.TRANS_KEY_*
4. Logging Quality - Lazy %s logging, no f-strings
5. Type Syntax - "str | None", not Optional[str]
6. Exception Handling - No bare Exception catches outside config flows
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
import re
import sys
from typing import NamedTuple

# Base paths
REPO_ROOT = Path(__file__).parent.parent
COMPONENT_PATH = REPO_ROOT / "custom_components" / "household_dashboard"

# Pure modules that must not import homeassistant
PURE_MODULE_PATHS = [
    COMPONENT_PATH / "utils",
    COMPONENT_PATH / "engines",
]

ENGINE_PATH = COMPONENT_PATH / "engines"

BARE_EXCEPTION_ALLOWLIST = [
    "config_flow.py",
    "options_flow.py",
]


class Violation(NamedTuple):
    """A boundary violation with context."""

    category: str
    file_path: Path
    line_number: int
    line_content: str
    message: str


def _python_files(paths: Iterable[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.py")))
    return files


def _scan(
    paths: Iterable[Path],
    patterns: list[re.Pattern[str]],
    category: str,
    message: str,
    line_filter: Callable[[str], bool] | None = None,
) -> list[Violation]:
    """Report every line in `paths` matching one of `patterns`."""
    violations = []
    for file_path in _python_files(paths):
        try:
            lines = file_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            print(f"Warning: Could not read {file_path}: {e}", file=sys.stderr)
            continue

        for line_num, line in enumerate(lines, start=1):
            if not any(pattern.search(line) for pattern in patterns):
                continue
            if line_filter is not None and not line_filter(line):
                continue
            violations.append(
                Violation(
                    category=category,
                    file_path=file_path,
                    line_number=line_num,
                    line_content=line.strip(),
                    message=message,
                )
            )
    return violations


def find_ha_imports_in_pure_modules() -> list[Violation]:
    """No homeassistant imports in utils/ or engines/."""
    return _scan(
        PURE_MODULE_PATHS,
        [
            re.compile(r"^\s*from\s+homeassistant"),
            re.compile(r"^\s*import\s+homeassistant"),
        ],
        "PURITY",
        "Homeassistant import in pure module",
    )


def find_const_imports_in_engines() -> list[Violation]:
    """Engines keep their own constants; const.py pulls in Home Assistant."""
    return _scan(
        [ENGINE_PATH],
        [
            re.compile(r"^\s*from\s+\.\.\s+import\s+.*\bconst\b"),
            re.compile(r"^\s*from\s+\.\.const\s+import"),
        ],
        "PURITY",
        "Engine imports the integration const module",
    )


def find_hardcoded_translation_keys() -> list[Violation]:
    """translation_key must use const.TRANS_KEY_* constants."""
    return _scan(
        [COMPONENT_PATH],
        [re.compile(r'translation_key\s*=\s*["\']([^"\']+)["\']')],
        "TRANSLATION",
        "Use const.TRANS_KEY_* for translation_key",
        line_filter=lambda line: "const.TRANS_KEY_" not in line,
    )


def find_fstrings_in_logging() -> list[Violation]:
    """No f-strings in logging statements."""
    return _scan(
        [COMPONENT_PATH],
        [re.compile(r'LOGGER\.(debug|info|warning|error|exception)\s*\(\s*f["\']')],
        "LOGGING",
        'Use lazy logging: logger.debug("msg: %s", var) not f"msg: {var}"',
    )


def find_old_typing_syntax() -> list[Violation]:
    """Modern type syntax (str | None, not Optional[str])."""
    return _scan(
        [COMPONENT_PATH],
        [re.compile(r"\bOptional\[")],
        "TYPE_SYNTAX",
        'Use modern syntax: "str | None" instead of "Optional[str]"',
    )


def find_bare_exceptions() -> list[Violation]:
    """No bare Exception catches (except in config flows)."""
    paths = [
        path
        for path in _python_files([COMPONENT_PATH])
        if path.name not in BARE_EXCEPTION_ALLOWLIST
    ]
    return _scan(
        paths,
        [re.compile(r"^\s*except\s+(Exception|BaseException)\s*:")],
        "EXCEPTION",
        "Use specific exception types, not bare Exception (unless in config flow)",
    )


CHECKS: list[tuple[str, Callable[[], list[Violation]]]] = [
    ("Purity Boundary", find_ha_imports_in_pure_modules),
    ("Engine Constants", find_const_imports_in_engines),
    ("Translation Constants", find_hardcoded_translation_keys),
    ("Logging Quality", find_fstrings_in_logging),
    ("Type Syntax", find_old_typing_syntax),
    ("Exception Handling", find_bare_exceptions),
]


def format_violations(violations: list[Violation]) -> str:
    """Format violations for display."""
    if not violations:
        return ""

    by_category: dict[str, list[Violation]] = {}
    for v in violations:
        by_category.setdefault(v.category, []).append(v)

    output = []
    for category, items in sorted(by_category.items()):
        output.append(f"\n{'=' * 80}")
        output.append(f"❌ {category} VIOLATIONS ({len(items)} found)")
        output.append(f"{'=' * 80}")

        for v in items:
            rel_path = v.file_path.relative_to(REPO_ROOT)
            output.append(f"\n📁 {rel_path}:{v.line_number}")
            output.append(f"   {v.line_content}")
            output.append(f"   ⚠️  {v.message}")

    return "\n".join(output)


def main() -> int:
    """Run all boundary checks."""
    print("🔍 Running architectural boundary checks...")
    print(f"   Checking: {COMPONENT_PATH.relative_to(REPO_ROOT)}\n")

    all_violations = []
    for check_name, check_func in CHECKS:
        print(f"   ⏳ Checking {check_name}...", end=" ")
        violations = check_func()
        if violations:
            print(f"❌ {len(violations)} violation(s)")
            all_violations.extend(violations)
        else:
            print("✅")

    if all_violations:
        print(format_violations(all_violations))
        print(f"\n{'=' * 80}")
        print(f"❌ FAILED: {len(all_violations)} boundary violation(s) found")
        print(f"{'=' * 80}\n")
        return 1

    print("\n" + "=" * 80)
    print("✅ SUCCESS: All architectural boundaries validated")
    print("=" * 80 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Проверка проекта dapr-http-client перед коммитом.

- black (форматирование)
- ruff (линтинг)
- mypy (типы) - пропускается с --fast
- pytest с coverage по src/dapr_http

Usage:
    python scripts/check.py
    python scripts/check.py --fast
    python scripts/check.py --fix
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Tuple

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BOLD = '\033[1m'
END = '\033[0m'

ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src"
TESTS_DIR = ROOT_DIR / "tests"


def run_command(command: List[str], description: str) -> bool:
    """Запустить команду; отсутствующий инструмент не считается ошибкой."""
    print(f"\n{BOLD}▶ {description}{END}")
    try:
        result = subprocess.run(command, capture_output=True, text=True, cwd=ROOT_DIR)
    except FileNotFoundError:
        print(f"{YELLOW}⚠ Command not found: {command[0]} - SKIPPED{END}")
        return True

    if result.returncode == 0:
        print(f"{GREEN}✓ {description} - OK{END}")
        return True

    print(f"{RED}✗ {description} - FAILED{END}")
    print((result.stdout + result.stderr)[-2000:])
    return False


def build_checks(args: argparse.Namespace) -> List[Tuple[str, List[str]]]:
    paths = [str(SRC_DIR), str(TESTS_DIR)]
    checks = [
        ("Black", ["black", *paths] if args.fix else ["black", "--check", *paths]),
        ("Ruff", ["ruff", "check", *paths] + (["--fix"] if args.fix else [])),
    ]
    if not args.fast:
        checks.append(("Mypy", ["mypy", str(SRC_DIR)]))
    if not args.skip_tests:
        checks.append(("Pytest", ["pytest", "--cov=dapr_http", "--cov-report=term-missing", "-q"]))
    return checks


def main() -> int:
    parser = argparse.ArgumentParser(description="Проверка качества кода")
    parser.add_argument("--fast", action="store_true", help="Без mypy")
    parser.add_argument("--fix", action="store_true", help="Автоматические исправления")
    parser.add_argument("--skip-tests", action="store_true", help="Только линтеры")
    args = parser.parse_args()

    results = [(name, run_command(command, name)) for name, command in build_checks(args)]

    print(f"\n{BOLD}{'=' * 40}\n  ИТОГ\n{'=' * 40}{END}")
    for name, success in results:
        color, status = (GREEN, "✓ PASSED") if success else (RED, "✗ FAILED")
        print(f"{color}{status:12}{END} {name}")

    return 0 if all(success for _, success in results) else 1


if __name__ == "__main__":
    sys.exit(main())

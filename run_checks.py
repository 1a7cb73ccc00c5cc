"""Run lint, type and test checks, writing each tool's output to a file.

Usage:
    python run_checks.py            # all checks
    python run_checks.py tests      # only the named checks
"""
from __future__ import annotations

import argparse
import subprocess
import sys

CHECKS: dict[str, tuple[list[str], str]] = {
    "lint": (["uv", "run", "ruff", "check", "src", "tests"], "ruff_output.txt"),
    "types": (["uv", "run", "mypy", "src/pydhparams"], "mypy_output.txt"),
    "tests": (["uv", "run", "pytest", "-v", "tests"], "test_output.txt"),
}


def run_check(name: str) -> int:
    command, output_file = CHECKS[name]
    print(f"[{name}] {' '.join(command)} > {output_file}")
    try:
        with open(output_file, "w") as f:
            return subprocess.run(command, stdout=f, stderr=subprocess.STDOUT, text=True).returncode
    except OSError as e:
        print(f"[{name}] could not start: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("checks", nargs="*", choices=sorted(CHECKS), default=sorted(CHECKS))
    args = parser.parse_args(argv)

    failed = [name for name in args.checks if run_check(name) != 0]
    if failed:
        print(f"failed: {', '.join(failed)}")
        return 1
    print("all checks passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())

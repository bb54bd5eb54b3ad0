#!/usr/bin/env python3
"""
Run a named slice of the pressure forecast test suite.

    python run_tests.py                 # everything except the performance suite
    python run_tests.py edge            # tests marked edge_case
    python run_tests.py all --coverage  # whole suite with a coverage report
"""

import argparse
import subprocess
import sys

COVERED_MODULES = ["features", "regression", "ts_core", "data_io", "generator", "api", "plot_utils"]

SUITES = {
    "fast": ["-m", "not performance"],
    "edge": ["-m", "edge_case"],
    "performance": ["-m", "performance"],
    "service": ["tests/test_api.py", "tests/test_data_io.py", "tests/test_generator.py"],
    "all": [],
}


def build_command(suite, coverage=False, extra=()):
    cmd = [sys.executable, "-m", "pytest", *SUITES[suite]]
    if coverage:
        cmd += [f"--cov={m}" for m in COVERED_MODULES]
        cmd += ["--cov-report=term-missing"]
    return cmd + list(extra)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("suite", nargs="?", default="fast", choices=sorted(SUITES))
    parser.add_argument("--coverage", action="store_true", help="report coverage of the service modules")
    args, extra = parser.parse_known_args(argv)

    cmd = build_command(args.suite, args.coverage, extra)
    print("+ " + " ".join(cmd))
    return subprocess.run(cmd).returncode


if __name__ == "__main__":
    sys.exit(main())

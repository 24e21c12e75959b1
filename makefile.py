#!/usr/bin/env python3
"""
makefile.py - Task runner for the rollstore project.

Usage:
    python makefile.py <target>

Requires: pip install -e ".[test,dev]"
"""

import os
import shutil
import subprocess
import sys

from colorama import Fore, Style
from colorama import init as colorama_init

colorama_init(autoreset=True)


def print_header(title):
    bar = Fore.CYAN + Style.BRIGHT + "=" * 52 + Style.RESET_ALL
    label = Fore.CYAN + Style.BRIGHT + f"  {title}" + Style.RESET_ALL
    print(f"\n{bar}\n{label}\n{bar}")


def print_step(msg):
    print(f"{Fore.YELLOW}-->{Style.RESET_ALL} {msg}")


def print_success(msg):
    print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {msg}")


def print_warn(msg):
    print(f"{Fore.YELLOW}[WARN]{Style.RESET_ALL} {msg}")


def run_cmd(args, allow_failure=False):
    """
    Run a command as a subprocess, streaming output directly to the terminal.
    Exits with the subprocess exit code on failure unless allow_failure=True.
    """
    try:
        result = subprocess.run(args)
    except FileNotFoundError:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Command not found: '{args[0]}'")
        print(f"        Ensure '{args[0]}' is installed and on your PATH.")
        if not allow_failure:
            sys.exit(127)
        return 127
    if result.returncode != 0 and not allow_failure:
        sys.exit(result.returncode)
    return result.returncode


def target_test():
    print_header("Running All Tests")
    run_cmd([sys.executable, "-m", "pytest", "tests", "-v"])


def target_test_storage():
    print_header("Running Storage Tests")
    run_cmd([sys.executable, "-m", "pytest", "tests/test_storage", "-v"])


def target_test_coverage():
    print_header("Running Tests with Coverage")
    run_cmd([sys.executable, "-m", "pytest", "tests", "--cov=rollstore", "--cov-report=term-missing"])


def target_coverage_html():
    print_header("Generating HTML Coverage Report")
    run_cmd([sys.executable, "-m", "pytest", "tests", "--cov=rollstore", "--cov-report=html"])
    print_success("Coverage report written to htmlcov/index.html")


def target_clean():
    print_header("Cleaning Caches")
    removed = 0
    for root, dirs, _ in os.walk("."):
        for name in list(dirs):
            if name in ("__pycache__", ".pytest_cache", "htmlcov"):
                path = os.path.join(root, name)
                try:
                    shutil.rmtree(path)
                    removed += 1
                except OSError as exc:
                    print_warn(f"Could not remove {path}: {exc}")
                dirs.remove(name)
    if os.path.exists(".coverage"):
        os.remove(".coverage")
    print_success(f"Removed {removed} cache directories")


def target_run():
    print_header("Listing Records (data: ./data/student_records.dat)")
    run_cmd([sys.executable, "-m", "rollstore.main", "--data-file", "data/student_records.dat", "list"])


def target_examples():
    print_header("Running Store Walkthrough")
    run_cmd([sys.executable, "examples/student_example.py"])


def target_run_fresh():
    print_header("Running Walkthrough on a Fresh Data Directory")
    fresh_path = os.path.join("tmp", "data")
    if os.path.exists(fresh_path):
        try:
            shutil.rmtree(fresh_path)
            print_step(f"Removed {fresh_path}")
        except OSError as exc:
            print_warn(f"Could not remove {fresh_path}: {exc}")
    target_examples()


TARGETS = {
    "test": (target_test, "Run all tests", "Testing"),
    "test-storage": (target_test_storage, "Run storage tests only", "Testing"),
    "test-coverage": (target_test_coverage, "Run tests with coverage", "Testing"),
    "coverage-html": (target_coverage_html, "Generate htmlcov/ report", "Testing"),
    "clean": (target_clean, "Remove caches and coverage output", "Tools"),
    "run": (target_run, "List records in ./data/student_records.dat", "Run"),
    "examples": (target_examples, "Run the store walkthrough", "Run"),
    "run-fresh": (target_run_fresh, "Wipe tmp/data and run the walkthrough", "Run"),
    "help": (None, "Show this help message", "Meta"),
}


def target_help():
    from collections import defaultdict

    title = Fore.CYAN + Style.BRIGHT + "rollstore - Available Commands" + Style.RESET_ALL
    print(f"\n{title}\n")
    groups = defaultdict(list)
    for name, (_, desc, group) in TARGETS.items():
        groups[group].append((name, desc))
    for group in ["Testing", "Run", "Tools", "Meta"]:
        if group not in groups:
            continue
        print(Fore.YELLOW + Style.BRIGHT + f"{group}:" + Style.RESET_ALL)
        for name, desc in groups[group]:
            print(f"  {Fore.GREEN}{name.ljust(24)}{Style.RESET_ALL}  {desc}")
        print()


TARGETS["help"] = (target_help, "Show this help message", "Meta")


def main():
    if len(sys.argv) < 2:
        target_help()
        sys.exit(0)

    name = sys.argv[1]

    if name not in TARGETS:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Unknown target: '{name}'")
        print("  Run:  python makefile.py help  to list all available targets.")
        sys.exit(1)

    func, _, _ = TARGETS[name]
    func()


if __name__ == "__main__":
    main()

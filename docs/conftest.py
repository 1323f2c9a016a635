"""Sybil configuration for testing code examples in documentation."""

import re
import subprocess
import sys
from pathlib import Path

from sybil import Sybil
from sybil.parsers.markdown import CodeBlockParser, PythonCodeBlockParser, SkipParser

# `unic` at the start of a command or after a pipe runs under the test interpreter
UNIC_COMMAND = re.compile(r"(^|\|\s*)unic\b")


def find_fixtures_dir(doc_path: Path) -> Path:
    """Locate the fixtures directory for a document, searching up to docs/."""
    current_path = doc_path.parent

    while True:
        if (current_path / "fixtures").exists():
            return current_path / "fixtures"
        if current_path.name == "docs" or current_path.parent == current_path:
            break
        current_path = current_path.parent

    raise FileNotFoundError(f"Fixtures directory not found starting from {doc_path.parent}")


def evaluate_console_block(example):
    """
    Evaluate console code blocks with $ prompts.

    Format:
        $ command
        expected output line 1
        expected output line 2

    Commands are run from the nearest fixtures/ directory.
    """
    fixtures_dir = find_fixtures_dir(Path(example.path))
    interpreter = f'"{sys.executable}" -m unic'

    lines = example.parsed.strip().split("\n")
    i = 0

    while i < len(lines):
        line = lines[i]

        if not line.strip():
            i += 1
            continue

        if not line.startswith("$ "):
            raise ValueError(f"Expected line to start with '$ ', got: {line}")

        command = UNIC_COMMAND.sub(lambda m: m.group(1) + interpreter, line[2:].strip())

        # Collect expected output (lines until next $ or end)
        expected_lines = []
        i += 1
        while i < len(lines) and not lines[i].startswith("$ "):
            if lines[i].strip():
                expected_lines.append(lines[i])
            i += 1

        expected_output = "\n".join(expected_lines)

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=fixtures_dir,
                capture_output=True,
                text=True,
                timeout=10,
            )
        except subprocess.TimeoutExpired as e:
            raise AssertionError(f"Command timed out: {command}") from e

        actual_output = result.stdout.strip()
        if expected_output:
            assert actual_output == expected_output, (
                f"\nCommand: {command}\n"
                f"Expected:\n{expected_output}\n"
                f"Actual:\n{actual_output}\n"
                f"Stderr:\n{result.stderr}"
            )


pytest_collect_file = Sybil(
    parsers=[
        PythonCodeBlockParser(),
        CodeBlockParser(language="console", evaluator=evaluate_console_block),
        SkipParser(),
    ],
    patterns=["*.md"],
    fixtures=["tmp_path"],
).pytest()

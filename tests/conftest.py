"""Shared fixtures for tsdocgen tests."""

import textwrap
from pathlib import Path

import pytest

from tsdocgen.compiler import create_program


@pytest.fixture
def write_source(tmp_path):
    """Write a dedented source file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def load_module(write_source):
    """Write a module and return (checker, source_file) for it."""

    def _load(name: str, content: str, options=None):
        path = write_source(name, content)
        program = create_program([path], options)
        return program.get_type_checker(), program.get_source_file(path)

    return _load

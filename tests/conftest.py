from __future__ import annotations

import os
import pathlib

import pytest


def pytest_report_header(config: pytest.Config) -> list[str]:
    headers: list[str] = []
    addopts: str = os.environ.get("PYTEST_ADDOPTS", "")
    if addopts:
        headers.append(f"PYTEST_ADDOPTS: {addopts}")
    return headers


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    root_tests_directory = pathlib.PurePath(__file__).parent

    unit_tests_directory = root_tests_directory / "unit_test"
    functional_tests_directory = root_tests_directory / "functional_test"

    for item in items:
        fspath = pathlib.PurePath(item.path)

        if fspath.is_relative_to(unit_tests_directory):
            item.add_marker(pytest.mark.unit, append=False)
        elif fspath.is_relative_to(functional_tests_directory):
            item.add_marker(pytest.mark.functional, append=False)

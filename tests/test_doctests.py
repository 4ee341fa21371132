from __future__ import annotations

import doctest

import pytest

import fetchlane.analysis
import fetchlane.http
import fetchlane.runtime


@pytest.mark.parametrize(
    "module",
    [fetchlane.analysis, fetchlane.http, fetchlane.runtime],
    ids=lambda module: module.__name__,
)
def test_module_doctests(module) -> None:
    failure_count, _ = doctest.testmod(
        module,
        optionflags=doctest.NORMALIZE_WHITESPACE,
    )
    assert failure_count == 0

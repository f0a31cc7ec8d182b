"""Result — verifies the Success/Failure tagged carrier.

Tests:
    - Success exposes its value and is_success
    - Failure re-raises its error on unwrap()
    - Failure refuses non-exception errors (no "neither" state)
    - Both variants are frozen and pattern-matchable
"""

import dataclasses

import pytest

from cleanflow.core.result import Failure, Success


def test_success_holds_value():
    result = Success({"id": 42})
    assert result.is_success
    assert result.unwrap() == {"id": 42}


def test_failure_unwrap_raises_carried_error():
    err = ValueError("missing title field")
    result = Failure(err)
    assert not result.is_success
    with pytest.raises(ValueError) as exc_info:
        result.unwrap()
    assert exc_info.value is err


def test_failure_requires_an_exception():
    with pytest.raises(TypeError):
        Failure(None)
    with pytest.raises(TypeError):
        Failure("some error text")


def test_variants_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Success(1).value = 2
    with pytest.raises(dataclasses.FrozenInstanceError):
        Failure(ValueError("x")).error = ValueError("y")


def _describe(result):
    match result:
        case Success(value=value):
            return f"ok:{value}"
        case Failure(error=error):
            return f"error:{error}"


def test_variants_support_pattern_matching():
    assert _describe(Success("todo")) == "ok:todo"
    assert _describe(Failure(RuntimeError("boom"))) == "error:boom"

"""
Custom readiness checks.

A custom check is evaluated alongside the readiness registry on every
readiness probe. Checks receive the application context (the Flask app)
and return a boolean.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HealthChecker(Protocol):
    """Capability interface for custom readiness checks."""

    def check(self, context: Any) -> bool:
        """Return True when the checked dependency is ready."""
        ...


class FunctionCheck:
    """Adapts a plain predicate function to the HealthChecker interface."""

    def __init__(self, func: Callable[[Any], bool]) -> None:
        self._func = func

    @property
    def name(self) -> str:
        return getattr(self._func, "__name__", repr(self._func))

    def check(self, context: Any) -> bool:
        return bool(self._func(context))

    def __repr__(self) -> str:
        return f"FunctionCheck({self.name})"


def as_checker(candidate: HealthChecker | Callable[[Any], bool]) -> HealthChecker:
    """Normalize a custom check into a HealthChecker.

    Args:
        candidate: A HealthChecker instance or a predicate function.

    Returns:
        The candidate itself when it already implements `check`,
        otherwise a FunctionCheck wrapping it.

    Raises:
        ValueError: If the candidate is neither a checker nor callable.
    """
    if isinstance(candidate, HealthChecker):
        return candidate
    if callable(candidate):
        return FunctionCheck(candidate)
    raise ValueError(
        f"Invalid custom check {candidate!r}: expected a callable or an object with check()"
    )


def run_checks(checks: Iterable[HealthChecker], context: Any) -> list[bool]:
    """Run every check in order and collect the results.

    Evaluation does not stop at the first failing check: later checks
    (and any side effects they have) always run, and the result list has
    one entry per check. The readiness decision is the same as with a
    short-circuiting evaluation; only the reported results differ.
    """
    return [bool(checker.check(context)) for checker in checks]

"""Satisfiability checking and failure reporting."""

from verifier.failure import (
    ConstraintNotSatisfied,
    CopyConstraintViolated,
    FailureLocation,
    VerifyFailure,
    format_failures,
    sort_failures,
)
from verifier.mock_prover import CheckerState, MockProver

__all__ = [
    "MockProver",
    "CheckerState",
    "VerifyFailure",
    "ConstraintNotSatisfied",
    "CopyConstraintViolated",
    "FailureLocation",
    "format_failures",
    "sort_failures",
]

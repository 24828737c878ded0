"""Base exception class and error kinds for all stepscore-specific errors."""

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Stable identifiers for every failure category stepscore can raise."""

    ORDERING_VIOLATION = "ORDERING_VIOLATION"
    DUPLICATE_STAGE = "DUPLICATE_STAGE"
    INVALID_STAGE_DEFINITION = "INVALID_STAGE_DEFINITION"
    MISSING_SCORE_STAGE = "MISSING_SCORE_STAGE"
    MISSING_SCORE_FOR_REASON = "MISSING_SCORE_FOR_REASON"
    NO_JUDGE_PROVIDED = "NO_JUDGE_PROVIDED"
    STAGE_EXECUTION_FAILED = "STAGE_EXECUTION_FAILED"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
    JUDGE_INVOCATION_FAILED = "JUDGE_INVOCATION_FAILED"
    NO_DATA_PROVIDED = "NO_DATA_PROVIDED"
    NO_SCORERS_PROVIDED = "NO_SCORERS_PROVIDED"
    INVALID_DATA_ITEM = "INVALID_DATA_ITEM"
    INVALID_SCORER_CONFIGURATION = "INVALID_SCORER_CONFIGURATION"
    TARGET_EXECUTION_FAILED = "TARGET_EXECUTION_FAILED"
    SCORER_EXECUTION_FAILED = "SCORER_EXECUTION_FAILED"
    CONFIG_LOAD_FAILED = "CONFIG_LOAD_FAILED"
    CONFIG_VALIDATION_FAILED = "CONFIG_VALIDATION_FAILED"
    MISSING_ENV_VARS = "MISSING_ENV_VARS"
    DATASET_LOAD_FAILED = "DATASET_LOAD_FAILED"
    OBJECT_RESOLUTION_FAILED = "OBJECT_RESOLUTION_FAILED"


class StepScoreError(Exception):
    """Base class for all stepscore errors.

    Subclasses pin ``kind`` so callers can branch on the failure category
    without importing every concrete error type.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)

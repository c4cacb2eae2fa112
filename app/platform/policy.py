from enum import Enum
from typing import Callable, Optional, TypeVar

from app.platform.logger import get_logger

logger = get_logger("policy")

T = TypeVar("T")


class FailurePolicy(str, Enum):
    """How a failing collaborator is treated by the caller"""
    PROPAGATE = "propagate"
    FAIL_OPEN = "fail_open"
    LOG_AND_IGNORE = "log_and_ignore"


def run_with_policy(
    policy: FailurePolicy,
    operation: Callable[[], T],
    *,
    fallback: Optional[T] = None,
    label: str,
) -> Optional[T]:
    """
    Run operation and apply policy if it raises.

    PROPAGATE re-raises. FAIL_OPEN and LOG_AND_IGNORE log the error and
    return fallback; FAIL_OPEN callers pass the "allowed" value as fallback.
    """
    try:
        return operation()
    except Exception as e:
        if policy is FailurePolicy.PROPAGATE:
            raise
        logger.error(f"{label} failed ({policy.value}): {e}")
        return fallback

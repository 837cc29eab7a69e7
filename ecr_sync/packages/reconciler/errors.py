"""Error classification for registry client failures.

Registry clients raise ``botocore.exceptions.ClientError`` for every service
error. The reconciler only cares whether a failure means "this resource does
not exist yet", so client adapters map the error code of a failed call onto a
small closed set of kinds and hand back an outcome instead of raising.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

from botocore.exceptions import ClientError

from .types import PolicyKind

T = TypeVar("T")


class ErrorKind(str, Enum):
    REPOSITORY_NOT_FOUND = "repository_not_found"
    LIFECYCLE_POLICY_NOT_FOUND = "lifecycle_policy_not_found"
    REPOSITORY_POLICY_NOT_FOUND = "repository_policy_not_found"
    UNCLASSIFIED = "unclassified"


# Kinds that mean "no policy of this kind is attached yet"
POLICY_ABSENT_KINDS: dict[PolicyKind, frozenset[ErrorKind]] = {
    PolicyKind.LIFECYCLE: frozenset(
        {ErrorKind.REPOSITORY_NOT_FOUND, ErrorKind.LIFECYCLE_POLICY_NOT_FOUND}
    ),
    PolicyKind.REPOSITORY: frozenset(
        {ErrorKind.REPOSITORY_NOT_FOUND, ErrorKind.REPOSITORY_POLICY_NOT_FOUND}
    ),
}


class ContractViolation(RuntimeError):
    """The registry answered with a response shape it documents it never sends."""


class CapabilityNotSupported(ValueError):
    """A policy was requested from a registry variant that has no such policy."""


def error_code(error: BaseException) -> str | None:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def classify_error(
    error: BaseException, codes: Mapping[str, ErrorKind]
) -> ErrorKind:
    """Map a raised error onto an ErrorKind.

    Args:
        error: Exception raised by the underlying boto3 client
        codes: Error code to kind table of the registry variant
               (e.g., {"RepositoryNotFoundException": REPOSITORY_NOT_FOUND})

    Returns:
        The matching kind, or UNCLASSIFIED for anything not in the table
    """
    code = error_code(error)
    if code is None:
        return ErrorKind.UNCLASSIFIED
    return codes.get(code, ErrorKind.UNCLASSIFIED)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    kind: ErrorKind
    error: Exception | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Failed:
    error: Exception


Outcome = Union[Ok[T], NotFound, Failed]


def to_outcome(
    error: Exception, codes: Mapping[str, ErrorKind]
) -> Union[NotFound, Failed]:
    kind = classify_error(error, codes)
    if kind == ErrorKind.UNCLASSIFIED:
        return Failed(error)
    return NotFound(kind, error)

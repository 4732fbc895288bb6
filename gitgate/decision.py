"""
Authorization decisions.

A Decision is the terminal result of evaluating one policy: either the request
is allowed (optionally carrying the repository it resolved), or it is denied
as Unauthorized (401) or Not Found (404).
"""

from dataclasses import dataclass
from enum import Enum

from gitgate.exceptions import AuthorizationError, NotFoundError
from gitgate.types.repos import RepositoryInfo


class Outcome(str, Enum):
    """Kind of authorization decision."""

    ALLOW = "allow"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"

    @property
    def status_code(self) -> int:
        """HTTP status code conventionally associated with the outcome."""
        return _STATUS_CODES[self]


_STATUS_CODES = {
    Outcome.ALLOW: 200,
    Outcome.UNAUTHORIZED: 401,
    Outcome.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class Decision:
    """
    Result of a policy evaluation.

    Use the ``allow``, ``unauthorized`` and ``not_found`` constructors rather
    than building instances directly. Only allowed decisions carry a
    repository, and only for resource-scoped policies.
    """

    outcome: Outcome
    repository: RepositoryInfo | None = None

    def __post_init__(self) -> None:
        if self.repository is not None and self.outcome is not Outcome.ALLOW:
            raise ValueError("Only an allowed decision may carry a repository")

    @classmethod
    def allow(cls, repository: RepositoryInfo | None = None) -> "Decision":
        return cls(Outcome.ALLOW, repository)

    @classmethod
    def unauthorized(cls) -> "Decision":
        return UNAUTHORIZED

    @classmethod
    def not_found(cls) -> "Decision":
        return NOT_FOUND

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW

    @property
    def status_code(self) -> int:
        return self.outcome.status_code

    def raise_for_outcome(self) -> None:
        """
        Raise the exception matching a denial.

        Raises:
            AuthorizationError: If the decision is Unauthorized
            NotFoundError: If the decision is Not Found
        """
        if self.outcome is Outcome.UNAUTHORIZED:
            raise AuthorizationError()
        if self.outcome is Outcome.NOT_FOUND:
            raise NotFoundError()


UNAUTHORIZED = Decision(Outcome.UNAUTHORIZED)
NOT_FOUND = Decision(Outcome.NOT_FOUND)


__all__ = [
    "Decision",
    "Outcome",
]

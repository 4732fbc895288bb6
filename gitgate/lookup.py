"""
Resource lookup interfaces consumed by the policy evaluators.

Implementations own persistence, caching, pooling and retries. Failures must
be raised (see LookupFailedError), never reported as a missing resource.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from gitgate.types.accounts import GroupMember
from gitgate.types.repos import Permission, RepositoryInfo


class RepositoryResolver(ABC):
    """Resolves an ``(owner, name)`` pair to a repository."""

    @abstractmethod
    def get_repository(self, owner: str, name: str) -> RepositoryInfo | None:
        """Return the repository, or None if it does not exist."""
        pass


class GroupResolver(ABC):
    """Resolves a group name to its membership records."""

    @abstractmethod
    def get_group_members(self, group_name: str) -> list[GroupMember]:
        """Return the group's members; empty if the name is not a group."""
        pass


class CollaboratorResolver(ABC):
    """Resolves collaborator grants of a repository."""

    @abstractmethod
    def get_collaborator_user_names(
        self,
        owner: str,
        name: str,
        permissions: Iterable[Permission] | None = None,
    ) -> set[str]:
        """
        Return user names holding a grant on the repository.

        Args:
            owner: Repository owner
            name: Repository name
            permissions: Only include grants with one of these permissions.
                None means any permission.
        """
        pass


class ResourceLookup(RepositoryResolver, GroupResolver, CollaboratorResolver):
    """A single backend answering all three kinds of lookup."""

    pass


__all__ = [
    "RepositoryResolver",
    "GroupResolver",
    "CollaboratorResolver",
    "ResourceLookup",
]

"""Repository-related data models."""

from dataclasses import dataclass
from enum import Enum


class Permission(str, Enum):
    """Permission level carried by a collaborator grant."""

    READ = "read"
    WRITE = "write"
    ADMIN = "admin"


@dataclass(frozen=True)
class RepositoryInfo:
    """Resolved repository."""

    owner: str
    name: str
    is_private: bool = False

    @property
    def full_name(self) -> str:
        """Return the repository as ``owner/name``."""
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class CollaboratorGrant:
    """Explicit per-repository permission granted to an account."""

    user_name: str
    permission: Permission

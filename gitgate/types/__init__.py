"""gitgate type definitions.

This module exports all data model types used by the authorization layer.
"""

from gitgate.types.accounts import Account, GroupMember
from gitgate.types.repos import CollaboratorGrant, Permission, RepositoryInfo

__all__ = [
    # Account types
    "Account",
    "GroupMember",
    # Repository types
    "Permission",
    "RepositoryInfo",
    "CollaboratorGrant",
]

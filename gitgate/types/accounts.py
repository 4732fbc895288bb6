"""Account and group membership data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """Authenticated account as seen by the authorization layer."""

    user_name: str
    is_admin: bool = False


@dataclass(frozen=True)
class GroupMember:
    """Membership of an account in a group."""

    group_name: str
    user_name: str
    is_manager: bool = False

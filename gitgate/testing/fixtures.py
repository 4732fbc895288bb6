"""
Pytest fixtures for gitgate testing.

Provides common fixtures for testing applications that put gitgate in front
of their controllers.
"""

from typing import Any, Generator

import pytest

from gitgate.context import IdentityContext
from gitgate.gate import Authenticator
from gitgate.policies import PolicyEvaluator
from gitgate.testing.mock import InMemoryResourceLookup
from gitgate.types.accounts import Account, GroupMember
from gitgate.types.repos import CollaboratorGrant, Permission, RepositoryInfo


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_account(
    user_name: str = "mock-user",
    is_admin: bool = False,
) -> Account:
    """Create an Account with sensible defaults."""
    return Account(user_name=user_name, is_admin=is_admin)


def create_mock_repository(
    owner: str = "mock-owner",
    name: str = "mock-repo",
    is_private: bool = False,
) -> RepositoryInfo:
    """Create a RepositoryInfo with sensible defaults."""
    return RepositoryInfo(owner=owner, name=name, is_private=is_private)


def create_mock_group_member(
    group_name: str = "mock-group",
    user_name: str = "mock-user",
    is_manager: bool = False,
) -> GroupMember:
    """Create a GroupMember with sensible defaults."""
    return GroupMember(group_name=group_name, user_name=user_name, is_manager=is_manager)


class RequestState:
    """Mutable stand-in for the per-request identity and path of a web framework."""

    def __init__(
        self,
        account: Account | None = None,
        path: Any = (),
    ) -> None:
        self.account = account
        self.path = path

    def identity(self) -> IdentityContext:
        return IdentityContext(self.account)

    def current_path(self) -> Any:
        return self.path


# ============================================================================
# Lookup Fixtures
# ============================================================================


@pytest.fixture
def lookup() -> Generator[InMemoryResourceLookup, None, None]:
    """
    Provide an empty InMemoryResourceLookup.

    Example:
        ```python
        def test_my_controller(lookup):
            lookup.add_repository("alice", "notes", is_private=True)
            ...
            assert lookup.was_called("get_repository")
        ```
    """
    resource_lookup = InMemoryResourceLookup()
    yield resource_lookup
    resource_lookup.reset()


@pytest.fixture
def evaluator(lookup: InMemoryResourceLookup) -> PolicyEvaluator:
    """Provide a PolicyEvaluator over the ``lookup`` fixture."""
    return PolicyEvaluator.from_lookup(lookup)


@pytest.fixture
def request_state() -> RequestState:
    """Provide a guest request with an empty path."""
    return RequestState()


@pytest.fixture
def authenticator(
    evaluator: PolicyEvaluator, request_state: RequestState
) -> Authenticator:
    """Provide an Authenticator reading identity and path from ``request_state``."""
    return Authenticator(
        evaluator,
        identity_provider=request_state.identity,
        path_provider=request_state.current_path,
    )


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_admin() -> Account:
    """Provide an administrator account."""
    return Account(user_name="root", is_admin=True)


@pytest.fixture
def sample_account() -> Account:
    """Provide a regular account."""
    return Account(user_name="alice")


@pytest.fixture
def sample_repository() -> RepositoryInfo:
    """Provide a sample public repository."""
    return RepositoryInfo(owner="alice", name="notes", is_private=False)


@pytest.fixture
def sample_private_repository() -> RepositoryInfo:
    """Provide a sample private repository."""
    return RepositoryInfo(owner="alice", name="secrets", is_private=True)


@pytest.fixture
def sample_collaborator() -> CollaboratorGrant:
    """Provide a sample write collaborator grant."""
    return CollaboratorGrant(user_name="carol", permission=Permission.WRITE)


__all__ = [
    # Helper functions
    "create_mock_account",
    "create_mock_repository",
    "create_mock_group_member",
    "RequestState",
    # Fixtures
    "lookup",
    "evaluator",
    "request_state",
    "authenticator",
    "sample_admin",
    "sample_account",
    "sample_repository",
    "sample_private_repository",
    "sample_collaborator",
]

"""gitgate testing utilities.

Provides an in-memory resource lookup and fixtures for testing applications
that use gitgate.
"""

from gitgate.testing.fixtures import (
    RequestState,
    create_mock_account,
    create_mock_group_member,
    create_mock_repository,
)
from gitgate.testing.mock import InMemoryResourceLookup, MockCall

__all__ = [
    # In-memory lookup
    "InMemoryResourceLookup",
    "MockCall",
    # Helpers
    "RequestState",
    "create_mock_account",
    "create_mock_repository",
    "create_mock_group_member",
]

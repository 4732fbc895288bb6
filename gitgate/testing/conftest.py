"""
Pytest plugin for gitgate testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitgate.testing.conftest"]

Or import the fixtures directly:

    from gitgate.testing.fixtures import lookup, authenticator
"""

# Re-export all fixtures for pytest auto-discovery
from gitgate.testing.fixtures import (
    authenticator,
    evaluator,
    lookup,
    request_state,
    sample_account,
    sample_admin,
    sample_collaborator,
    sample_private_repository,
    sample_repository,
)

__all__ = [
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

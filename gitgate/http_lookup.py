"""
Resource lookup backed by the platform's REST API.

Endpoints (relative to the configured base URL):
    GET /repos/{owner}/{name}                -> {"data": {"owner", "name", "private"}}
    GET /groups/{group}/members              -> {"data": {"members": [{"userName", "isManager"}]}}
    GET /repos/{owner}/{name}/collaborators  -> {"data": {"collaborators": [{"userName", "permission"}]}}
"""

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any
from urllib.parse import quote

from gitgate.exceptions import ConfigurationError, LookupFailedError
from gitgate.lookup import ResourceLookup
from gitgate.transport import HTTPTransport, RetryConfig
from gitgate.types.accounts import GroupMember
from gitgate.types.repos import CollaboratorGrant, Permission, RepositoryInfo


class HTTPResourceLookup(ResourceLookup):
    """
    Resolves repositories, groups and collaborators over HTTP.

    Example:
        ```python
        from gitgate.http_lookup import HTTPResourceLookup

        with HTTPResourceLookup("https://git.example.com/api/v3", token="...") as lookup:
            repo = lookup.get_repository("alice", "notes")
        ```
    """

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the lookup.

        Args:
            base_url: Base URL of the platform API
            token: API token (optional)
            timeout: Request timeout in seconds (default: 10.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
    ) -> "HTTPResourceLookup":
        """
        Create a lookup from environment variables.

        Environment variables:
            GITGATE_API_URL: Base URL of the platform API (required)
            GITGATE_API_TOKEN: API token (optional)
            GITGATE_TIMEOUT: Request timeout in seconds (optional, default: 10)

        Raises:
            ConfigurationError: If required variables are missing or invalid
        """
        base_url = os.environ.get("GITGATE_API_URL")
        token = os.environ.get("GITGATE_API_TOKEN") or None
        timeout_str = os.environ.get("GITGATE_TIMEOUT")

        if not base_url:
            raise ConfigurationError("GITGATE_API_URL environment variable not set")

        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GITGATE_TIMEOUT: {timeout_str}. Must be a number of seconds"
                ) from None
            if timeout <= 0:
                raise ConfigurationError(
                    f"Invalid GITGATE_TIMEOUT: {timeout_str}. Must be positive"
                )

        return cls(base_url=base_url, token=token, timeout=timeout, retry_config=retry_config)

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport."""
        return self._transport

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "HTTPResourceLookup":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_repository(self, owner: str, name: str) -> RepositoryInfo | None:
        data = self._transport.get(_repo_path(owner, name), not_found_ok=True)
        if data is None:
            return None
        with _invalid_payload("repository"):
            return RepositoryInfo(
                owner=data["owner"],
                name=data["name"],
                is_private=bool(data.get("private", False)),
            )

    def get_group_members(self, group_name: str) -> list[GroupMember]:
        data = self._transport.get(
            f"/groups/{quote(group_name, safe='')}/members", not_found_ok=True
        )
        if data is None:
            return []
        with _invalid_payload("group members"):
            return [
                GroupMember(
                    group_name=group_name,
                    user_name=member["userName"],
                    is_manager=bool(member.get("isManager", False)),
                )
                for member in data.get("members", [])
            ]

    def get_collaborators(self, owner: str, name: str) -> list[CollaboratorGrant]:
        """List every collaborator grant of the repository."""
        data = self._transport.get(f"{_repo_path(owner, name)}/collaborators")
        with _invalid_payload("collaborators"):
            return [
                CollaboratorGrant(
                    user_name=collab["userName"],
                    permission=Permission(collab["permission"].lower()),
                )
                for collab in (data or {}).get("collaborators", [])
            ]

    def get_collaborator_user_names(
        self,
        owner: str,
        name: str,
        permissions: Iterable[Permission] | None = None,
    ) -> set[str]:
        wanted = None if permissions is None else set(permissions)
        return {
            grant.user_name
            for grant in self.get_collaborators(owner, name)
            if wanted is None or grant.permission in wanted
        }


def _repo_path(owner: str, name: str) -> str:
    return f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}"


@contextmanager
def _invalid_payload(resource: str) -> Iterator[None]:
    """Report a malformed payload as a lookup failure."""
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise LookupFailedError(
            "INVALID_RESPONSE", f"Malformed {resource} payload: {e!r}"
        ) from e


__all__ = [
    "HTTPResourceLookup",
]

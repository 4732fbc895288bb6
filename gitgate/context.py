"""
Request context for authorization: who is asking and which path they asked for.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from gitgate.exceptions import InvalidPathError
from gitgate.types.accounts import Account


@dataclass(frozen=True)
class IdentityContext:
    """
    Read-only snapshot of the actor making the request.

    ``login_account`` is None for guests.
    """

    login_account: Account | None = None

    @classmethod
    def guest(cls) -> "IdentityContext":
        return cls(None)

    @classmethod
    def of(cls, identity: "Account | IdentityContext | None") -> "IdentityContext":
        """Normalize an account, a context or None into a context."""
        if isinstance(identity, IdentityContext):
            return identity
        return cls(identity)

    @property
    def is_signed_in(self) -> bool:
        return self.login_account is not None

    @property
    def is_admin(self) -> bool:
        return self.login_account is not None and self.login_account.is_admin

    @property
    def user_name(self) -> str | None:
        if self.login_account is None:
            return None
        return self.login_account.user_name


@dataclass(frozen=True)
class RequestPath:
    """
    Ordered request path segments.

    Segment 0 is the owner (user or group name), segment 1 the repository name.
    """

    segments: tuple[str, ...]

    def __init__(self, segments: Sequence[str]) -> None:
        object.__setattr__(self, "segments", tuple(segments))

    @classmethod
    def of(cls, path: "RequestPath | Sequence[str] | str") -> "RequestPath":
        """Normalize a RequestPath, a segment sequence or a raw path string."""
        if isinstance(path, RequestPath):
            return path
        if isinstance(path, str):
            return split_path(path)
        return cls(path)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.segments)

    def __getitem__(self, index: int) -> str:
        try:
            return self.segments[index]
        except IndexError:
            raise InvalidPathError(
                f"Path {self} has no segment {index}"
            ) from None

    def __str__(self) -> str:
        return "/" + "/".join(self.segments)

    def require(self, count: int) -> "RequestPath":
        """
        Check that the path has at least ``count`` segments.

        Raises:
            InvalidPathError: If the path is shorter
        """
        if len(self.segments) < count:
            raise InvalidPathError(
                f"Path {self} has {len(self.segments)} segment(s), {count} required"
            )
        return self

    @property
    def owner(self) -> str:
        return self[0]

    @property
    def repository_name(self) -> str:
        return self[1]


def split_path(path: str, context_path: str = "") -> RequestPath:
    """
    Split a request URI into path segments.

    The servlet-style context path is removed first, then the leading slash.
    Query strings are ignored and trailing empty segments dropped, so
    ``/alice/repo/`` and ``/alice/repo?tab=1`` both give ``("alice", "repo")``.

    Args:
        path: Request URI (e.g., "/alice/repo/settings")
        context_path: Mount point of the application (e.g., "/git")

    Returns:
        RequestPath with the remaining segments
    """
    path = path.split("?", 1)[0].split("#", 1)[0]
    context_path = context_path.rstrip("/")
    if context_path and (path == context_path or path.startswith(context_path + "/")):
        path = path[len(context_path):]
    if path.startswith("/"):
        path = path[1:]

    segments = path.split("/")
    while segments and segments[-1] == "":
        segments.pop()
    return RequestPath(segments)


__all__ = [
    "IdentityContext",
    "RequestPath",
    "split_path",
]

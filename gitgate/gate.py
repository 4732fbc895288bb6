"""
Gate wrappers that put a policy in front of a controller action.

Each gate takes the protected action and returns a callable that, every time it
is invoked, reads the current identity and request path, evaluates the policy,
and either runs the action or produces the denial outcome instead.

Example:
    ```python
    from gitgate import Authenticator
    from gitgate.http_lookup import HTTPResourceLookup

    gate = Authenticator.from_lookup(
        HTTPResourceLookup.from_env(),
        identity_provider=lambda: session.account,
        path_provider=lambda: request.path,
    )

    @gate.owner_only
    def delete_repository(repository):
        ...

    @gate.collaborators_only_with_form
    def edit_file(form, repository):
        ...
    ```
"""

import functools
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from gitgate.context import IdentityContext, RequestPath, split_path
from gitgate.decision import Decision
from gitgate.lookup import ResourceLookup
from gitgate.policies import Policy, PolicyEvaluator
from gitgate.types.accounts import Account
from gitgate.types.repos import RepositoryInfo

T = TypeVar("T")
F = TypeVar("F")

IdentityProvider = Callable[[], Account | IdentityContext | None]
PathProvider = Callable[[], RequestPath | Sequence[str] | str]
DenyHandler = Callable[[Decision], Any]


class Authenticator:
    """
    Wraps controller actions with authorization policies.

    Denials raise AuthorizationError (401) or NotFoundError (404) unless a
    ``deny_handler`` is given, in which case the handler receives the
    Decision and its return value is returned in place of the action's.
    """

    def __init__(
        self,
        evaluator: PolicyEvaluator,
        identity_provider: IdentityProvider,
        path_provider: PathProvider,
        deny_handler: DenyHandler | None = None,
        context_path: str = "",
    ) -> None:
        """
        Initialize the authenticator.

        Args:
            evaluator: Policy evaluator to consult
            identity_provider: Returns the current actor (None for guests)
            path_provider: Returns the current request path, as segments or a raw URI
            deny_handler: Produces the response for a denial (default: raise)
            context_path: Application mount point stripped from raw URIs
        """
        self.evaluator = evaluator
        self.identity_provider = identity_provider
        self.path_provider = path_provider
        self.deny_handler = deny_handler
        self.context_path = context_path

    @classmethod
    def from_lookup(
        cls,
        lookup: ResourceLookup,
        identity_provider: IdentityProvider,
        path_provider: PathProvider,
        deny_handler: DenyHandler | None = None,
        context_path: str = "",
    ) -> "Authenticator":
        """Create an authenticator whose evaluator uses one lookup for everything."""
        return cls(
            PolicyEvaluator.from_lookup(lookup),
            identity_provider,
            path_provider,
            deny_handler=deny_handler,
            context_path=context_path,
        )

    def authorize(self, policy: Policy) -> Decision:
        """Evaluate a policy for the current request without running anything."""
        return self.evaluator.evaluate(policy, self.identity_provider(), self._current_path())

    # ------------------------------------------------------------------
    # Account-scoped gates: action() / action(form)
    # ------------------------------------------------------------------

    def oneself_only(self, action: Callable[[], T]) -> Callable[[], T | Any]:
        """Allow only the account named by the path, and administrators."""
        return self._gate(Policy.ONESELF, action)

    def oneself_only_with_form(self, action: Callable[[F], T]) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.ONESELF, action)

    def users_only(self, action: Callable[[], T]) -> Callable[[], T | Any]:
        """Allow any signed in account."""
        return self._gate(Policy.USERS, action)

    def users_only_with_form(self, action: Callable[[F], T]) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.USERS, action)

    def admin_only(self, action: Callable[[], T]) -> Callable[[], T | Any]:
        """Allow only administrators."""
        return self._gate(Policy.ADMIN, action)

    def admin_only_with_form(self, action: Callable[[F], T]) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.ADMIN, action)

    def managers_only(self, action: Callable[[], T]) -> Callable[[], T | Any]:
        """Allow only managers of the group named by the path."""
        return self._gate(Policy.MANAGERS, action)

    def managers_only_with_form(self, action: Callable[[F], T]) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.MANAGERS, action)

    # ------------------------------------------------------------------
    # Repository-scoped gates: action(repository) / action(form, repository)
    # ------------------------------------------------------------------

    def owner_only(
        self, action: Callable[[RepositoryInfo], T]
    ) -> Callable[[], T | Any]:
        """Allow the repository owner, group managers, admin collaborators and administrators."""
        return self._gate(Policy.OWNER, action)

    def owner_only_with_form(
        self, action: Callable[[F, RepositoryInfo], T]
    ) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.OWNER, action)

    def collaborators_only(
        self, action: Callable[[RepositoryInfo], T]
    ) -> Callable[[], T | Any]:
        """Allow the namespace owner, group members, write collaborators and administrators."""
        return self._gate(Policy.COLLABORATORS, action)

    def collaborators_only_with_form(
        self, action: Callable[[F, RepositoryInfo], T]
    ) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.COLLABORATORS, action)

    def referrers_only(
        self, action: Callable[[RepositoryInfo], T]
    ) -> Callable[[], T | Any]:
        """Allow everyone on public repositories and readers on private ones."""
        return self._gate(Policy.REFERRERS, action)

    def referrers_only_with_form(
        self, action: Callable[[F, RepositoryInfo], T]
    ) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.REFERRERS, action)

    def readable_users_only(
        self, action: Callable[[RepositoryInfo], T]
    ) -> Callable[[], T | Any]:
        """Allow signed in accounts that can read the repository."""
        return self._gate(Policy.READABLE_USERS, action)

    def readable_users_only_with_form(
        self, action: Callable[[F, RepositoryInfo], T]
    ) -> Callable[[F], T | Any]:
        return self._gate_with_form(Policy.READABLE_USERS, action)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _gate(self, policy: Policy, action: Callable[..., T]) -> Callable[[], T | Any]:
        @functools.wraps(action)
        def gated() -> T | Any:
            decision = self.authorize(policy)
            if not decision.allowed:
                return self._deny(decision)
            if policy.resource_scoped:
                return action(decision.repository)
            return action()

        return gated

    def _gate_with_form(
        self, policy: Policy, action: Callable[..., T]
    ) -> Callable[[F], T | Any]:
        @functools.wraps(action)
        def gated(form: F) -> T | Any:
            decision = self.authorize(policy)
            if not decision.allowed:
                return self._deny(decision)
            if policy.resource_scoped:
                return action(form, decision.repository)
            return action(form)

        return gated

    def _deny(self, decision: Decision) -> Any:
        if self.deny_handler is not None:
            return self.deny_handler(decision)
        decision.raise_for_outcome()

    def _current_path(self) -> RequestPath:
        path = self.path_provider()
        if isinstance(path, str):
            return split_path(path, self.context_path)
        return RequestPath.of(path)


__all__ = [
    "Authenticator",
]

"""
Authorization policies.

Each policy is a fixed, ordered chain of rules evaluated first-match-wins.
Rules are lazy: a lookup only runs once every earlier rule has failed to match.
Resource-scoped policies resolve the repository named by the first two path
segments before any rule runs, and answer Not Found when it does not exist.
"""

from collections.abc import Callable, Sequence
from enum import Enum

from gitgate.context import IdentityContext, RequestPath
from gitgate.decision import Decision
from gitgate.logging import log_decision
from gitgate.lookup import (
    CollaboratorResolver,
    GroupResolver,
    RepositoryResolver,
    ResourceLookup,
)
from gitgate.types.accounts import Account
from gitgate.types.repos import Permission, RepositoryInfo

Rule = tuple[str, Callable[[], bool]]

IdentityLike = Account | IdentityContext | None
PathLike = RequestPath | Sequence[str] | str


class Policy(str, Enum):
    """The fixed set of authorization policies."""

    ONESELF = "oneself"
    OWNER = "owner"
    USERS = "users"
    ADMIN = "admin"
    COLLABORATORS = "collaborators"
    REFERRERS = "referrers"
    READABLE_USERS = "readable_users"
    MANAGERS = "managers"

    @property
    def resource_scoped(self) -> bool:
        """Whether the policy resolves a repository and passes it to the action."""
        return self in _RESOURCE_SCOPED


_RESOURCE_SCOPED = frozenset({
    Policy.OWNER,
    Policy.COLLABORATORS,
    Policy.REFERRERS,
    Policy.READABLE_USERS,
})

_ADMIN_PERMISSIONS = (Permission.ADMIN,)
_WRITE_PERMISSIONS = (Permission.ADMIN, Permission.WRITE)


class PolicyEvaluator:
    """
    Evaluates authorization policies against injected resource lookups.

    The evaluator holds no per-request state; one instance can serve any number
    of concurrent requests.

    Example:
        ```python
        from gitgate import Account, PolicyEvaluator
        from gitgate.testing import InMemoryResourceLookup

        lookup = InMemoryResourceLookup()
        lookup.add_repository("alice", "notes", is_private=True)

        evaluator = PolicyEvaluator.from_lookup(lookup)
        decision = evaluator.owner(Account("alice"), ["alice", "notes"])
        assert decision.allowed
        ```
    """

    def __init__(
        self,
        repositories: RepositoryResolver,
        groups: GroupResolver,
        collaborators: CollaboratorResolver,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            repositories: Resolves (owner, name) to a repository
            groups: Resolves a group name to its members
            collaborators: Resolves collaborator grants of a repository
        """
        self.repository_resolver = repositories
        self.group_resolver = groups
        self.collaborator_resolver = collaborators

    @classmethod
    def from_lookup(cls, lookup: ResourceLookup) -> "PolicyEvaluator":
        """Create an evaluator backed by a single lookup for all resources."""
        return cls(lookup, lookup, lookup)

    def evaluate(
        self, policy: Policy, identity: IdentityLike, path: PathLike
    ) -> Decision:
        """
        Evaluate the named policy.

        Args:
            policy: Policy to apply
            identity: Current actor (account, context, or None for guests)
            path: Request path segments or raw request path

        Returns:
            The decision

        Raises:
            InvalidPathError: If the path is too short for the policy
            LookupFailedError: If a resource lookup fails
        """
        return getattr(self, Policy(policy).value)(identity, path)

    # ------------------------------------------------------------------
    # Account-scoped policies
    # ------------------------------------------------------------------

    def oneself(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Allow only the account named by the path, and administrators."""
        identity, path = _normalize(identity, path, 1)
        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [
                ("admin", lambda: account.is_admin),
                ("oneself", lambda: path[0] == account.user_name),
            ]
        return self._decide(Policy.ONESELF, identity, path, rules)

    def admin(self, identity: IdentityLike, path: PathLike = ()) -> Decision:
        """Allow only administrators."""
        identity, path = _normalize(identity, path, 0)
        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [("admin", lambda: account.is_admin)]
        return self._decide(Policy.ADMIN, identity, path, rules)

    def users(self, identity: IdentityLike, path: PathLike = ()) -> Decision:
        """Allow any signed in account."""
        identity, path = _normalize(identity, path, 0)
        rules: list[Rule] = []
        if identity.is_signed_in:
            rules = [("signed_in", lambda: True)]
        return self._decide(Policy.USERS, identity, path, rules)

    def managers(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Allow only managers of the group named by the path."""
        identity, path = _normalize(identity, path, 1)
        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [
                ("group_manager", lambda: self._is_group_member(
                    path[0], account.user_name, managers_only=True
                )),
            ]
        return self._decide(Policy.MANAGERS, identity, path, rules)

    # ------------------------------------------------------------------
    # Repository-scoped policies
    # ------------------------------------------------------------------

    def owner(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Allow the repository owner, group managers, admin collaborators and administrators."""
        identity, path = _normalize(identity, path, 2)
        repository = self._resolve(Policy.OWNER, identity, path)
        if repository is None:
            return Decision.not_found()

        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [
                ("admin", lambda: account.is_admin),
                ("owner", lambda: repository.owner == account.user_name),
                ("group_manager", lambda: self._is_group_member(
                    repository.owner, account.user_name, managers_only=True
                )),
                ("collaborator", lambda: self._is_collaborator(
                    path, account.user_name, _ADMIN_PERMISSIONS
                )),
            ]
        return self._decide(Policy.OWNER, identity, path, rules, repository)

    def collaborators(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Allow the namespace owner, group members, write collaborators and administrators."""
        identity, path = _normalize(identity, path, 2)
        repository = self._resolve(Policy.COLLABORATORS, identity, path)
        if repository is None:
            return Decision.not_found()

        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [
                ("admin", lambda: account.is_admin),
                ("namespace", lambda: path[0] == account.user_name),
                ("group_member", lambda: self._is_group_member(
                    repository.owner, account.user_name
                )),
                ("collaborator", lambda: self._is_collaborator(
                    path, account.user_name, _WRITE_PERMISSIONS
                )),
            ]
        return self._decide(Policy.COLLABORATORS, identity, path, rules, repository)

    def referrers(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Allow anyone, guests included, on public repositories; readers on private ones."""
        identity, path = _normalize(identity, path, 2)
        repository = self._resolve(Policy.REFERRERS, identity, path)
        if repository is None:
            return Decision.not_found()

        account = identity.login_account
        rules: list[Rule] = [("public", lambda: not repository.is_private)]
        if account is not None:
            rules += [
                ("admin", lambda: account.is_admin),
                ("namespace", lambda: path[0] == account.user_name),
                ("group_member", lambda: self._is_group_member(
                    repository.owner, account.user_name
                )),
                ("collaborator", lambda: self._is_collaborator(
                    path, account.user_name
                )),
            ]
        return self._decide(Policy.REFERRERS, identity, path, rules, repository)

    def readable_users(self, identity: IdentityLike, path: PathLike) -> Decision:
        """Like referrers, but guests are never allowed."""
        identity, path = _normalize(identity, path, 2)
        repository = self._resolve(Policy.READABLE_USERS, identity, path)
        if repository is None:
            return Decision.not_found()

        account = identity.login_account
        rules: list[Rule] = []
        if account is not None:
            rules = [
                ("admin", lambda: account.is_admin),
                ("public", lambda: not repository.is_private),
                ("namespace", lambda: path[0] == account.user_name),
                ("group_member", lambda: self._is_group_member(
                    repository.owner, account.user_name
                )),
                ("collaborator", lambda: self._is_collaborator(
                    path, account.user_name
                )),
            ]
        return self._decide(Policy.READABLE_USERS, identity, path, rules, repository)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(
        self, policy: Policy, identity: IdentityContext, path: RequestPath
    ) -> RepositoryInfo | None:
        repository = self.repository_resolver.get_repository(path[0], path[1])
        if repository is None:
            log_decision(
                policy.value, identity.user_name, str(path),
                Decision.not_found().outcome.value, None,
            )
        return repository

    def _is_group_member(
        self, group_name: str, user_name: str, managers_only: bool = False
    ) -> bool:
        return any(
            member.user_name == user_name and (member.is_manager or not managers_only)
            for member in self.group_resolver.get_group_members(group_name)
        )

    def _is_collaborator(
        self,
        path: RequestPath,
        user_name: str,
        permissions: Sequence[Permission] | None = None,
    ) -> bool:
        user_names = self.collaborator_resolver.get_collaborator_user_names(
            path[0], path[1], permissions
        )
        return user_name in user_names

    def _decide(
        self,
        policy: Policy,
        identity: IdentityContext,
        path: RequestPath,
        rules: list[Rule],
        repository: RepositoryInfo | None = None,
    ) -> Decision:
        for rule, matches in rules:
            if matches():
                decision = Decision.allow(repository)
                break
        else:
            rule = None
            decision = Decision.unauthorized()

        log_decision(
            policy.value, identity.user_name, str(path), decision.outcome.value, rule
        )
        return decision


def _normalize(
    identity: IdentityLike, path: PathLike, required_segments: int
) -> tuple[IdentityContext, RequestPath]:
    return IdentityContext.of(identity), RequestPath.of(path).require(required_segments)


__all__ = [
    "Policy",
    "PolicyEvaluator",
]

"""
Tests for the Authenticator gate wrappers.
"""

import pytest

from gitgate.decision import Decision, Outcome
from gitgate.exceptions import AuthorizationError, InvalidPathError, NotFoundError, ServerError
from gitgate.gate import Authenticator
from gitgate.policies import Policy, PolicyEvaluator
from gitgate.testing import InMemoryResourceLookup, RequestState
from gitgate.types.accounts import Account
from gitgate.types.repos import Permission, RepositoryInfo


@pytest.fixture
def seeded_lookup(lookup: InMemoryResourceLookup) -> InMemoryResourceLookup:
    lookup.add_repository("alice", "notes", is_private=True)
    lookup.add_repository("alice", "blog", is_private=False)
    lookup.add_group_member("acme", "bob", is_manager=True)
    return lookup


class TestResourceGates:
    def test_allowed_action_receives_repository(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        request_state.account = Account("alice")
        request_state.path = ["alice", "notes", "settings"]

        handler = authenticator.owner_only(lambda repository: repository)

        assert handler() == RepositoryInfo("alice", "notes", is_private=True)

    def test_form_is_passed_before_repository(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        request_state.account = Account("alice")
        request_state.path = "/alice/notes/edit"

        handler = authenticator.collaborators_only_with_form(
            lambda form, repository: (form, repository.name)
        )

        assert handler({"title": "x"}) == ({"title": "x"}, "notes")

    def test_unauthorized_raises_and_skips_action(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        calls: list[RepositoryInfo] = []
        request_state.path = ["alice", "notes"]

        handler = authenticator.referrers_only(calls.append)

        with pytest.raises(AuthorizationError) as exc_info:
            handler()

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "UNAUTHORIZED"
        assert calls == []

    def test_missing_repository_raises_not_found(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        request_state.account = Account("root", is_admin=True)
        request_state.path = ["alice", "missing"]

        handler = authenticator.readable_users_only(lambda repository: "ran")

        with pytest.raises(NotFoundError) as exc_info:
            handler()

        assert exc_info.value.status_code == 404

    def test_guest_reads_public_repository(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        request_state.path = ["alice", "blog"]

        handler = authenticator.referrers_only_with_form(
            lambda form, repository: f"{form}:{repository.full_name}"
        )

        assert handler("q") == "q:alice/blog"

    def test_decision_runs_on_every_call(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        handler = authenticator.collaborators_only(lambda repository: repository.name)

        request_state.account = Account("carol")
        request_state.path = ["alice", "notes"]
        with pytest.raises(AuthorizationError):
            handler()

        seeded_lookup.add_collaborator("alice", "notes", "carol", Permission.WRITE)
        assert handler() == "notes"
        assert seeded_lookup.call_count("get_repository") == 2

    def test_lookup_errors_propagate(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        seeded_lookup.configure_error("get_repository", ServerError("DB_DOWN", "down"))
        request_state.path = ["alice", "notes"]

        with pytest.raises(ServerError):
            authenticator.owner_only(lambda repository: None)()


class TestAccountGates:
    def test_oneself_passes_no_arguments(
        self, authenticator: Authenticator, request_state: RequestState
    ) -> None:
        request_state.account = Account("alice")
        request_state.path = ["alice", "profile"]

        assert authenticator.oneself_only(lambda: "ok")() == "ok"

    def test_oneself_with_form(
        self, authenticator: Authenticator, request_state: RequestState
    ) -> None:
        request_state.account = Account("alice")
        request_state.path = ["alice"]

        assert authenticator.oneself_only_with_form(lambda form: form * 2)(21) == 42

    def test_admin_only(
        self, authenticator: Authenticator, request_state: RequestState
    ) -> None:
        handler = authenticator.admin_only(lambda: "ok")

        request_state.account = Account("alice")
        with pytest.raises(AuthorizationError):
            handler()

        request_state.account = Account("root", is_admin=True)
        assert handler() == "ok"

    def test_users_only(
        self, authenticator: Authenticator, request_state: RequestState
    ) -> None:
        handler = authenticator.users_only_with_form(lambda form: form)

        with pytest.raises(AuthorizationError):
            handler("payload")

        request_state.account = Account("alice")
        assert handler("payload") == "payload"

    def test_managers_only(
        self,
        authenticator: Authenticator,
        request_state: RequestState,
        seeded_lookup: InMemoryResourceLookup,
    ) -> None:
        request_state.path = ["acme", "members"]
        handler = authenticator.managers_only(lambda: "ok")

        request_state.account = Account("bob")
        assert handler() == "ok"

        request_state.account = Account("alice")
        with pytest.raises(AuthorizationError):
            handler()

    def test_short_path_is_a_routing_error(
        self, authenticator: Authenticator, request_state: RequestState
    ) -> None:
        request_state.account = Account("alice")
        request_state.path = "/"

        with pytest.raises(InvalidPathError):
            authenticator.oneself_only(lambda: None)()


class TestDenyHandler:
    def test_handler_result_replaces_action(self, lookup: InMemoryResourceLookup) -> None:
        lookup.add_repository("alice", "notes", is_private=True)
        state = RequestState(path=["alice", "notes"])
        seen: list[Decision] = []

        def deny(decision: Decision) -> tuple[int, str]:
            seen.append(decision)
            return decision.status_code, decision.outcome.value

        gate = Authenticator.from_lookup(
            lookup,
            identity_provider=lambda: state.account,
            path_provider=state.current_path,
            deny_handler=deny,
        )

        assert gate.owner_only(lambda repository: "ran")() == (401, "unauthorized")

        state.path = ["alice", "gone"]
        assert gate.owner_only(lambda repository: "ran")() == (404, "not_found")
        assert [d.outcome for d in seen] == [Outcome.UNAUTHORIZED, Outcome.NOT_FOUND]

    def test_context_path_is_stripped(self, lookup: InMemoryResourceLookup) -> None:
        lookup.add_repository("alice", "notes")
        gate = Authenticator(
            PolicyEvaluator.from_lookup(lookup),
            identity_provider=lambda: None,
            path_provider=lambda: "/git/alice/notes/tree/main",
            context_path="/git",
        )

        assert gate.referrers_only(lambda repository: repository.full_name)() == "alice/notes"


def test_authorize_returns_decision(
    authenticator: Authenticator,
    request_state: RequestState,
    lookup: InMemoryResourceLookup,
) -> None:
    lookup.add_repository("alice", "notes")
    request_state.path = ["alice", "notes"]

    decision = authenticator.authorize(Policy.REFERRERS)

    assert decision.allowed
    assert decision.repository == RepositoryInfo("alice", "notes")


def test_wrapped_action_keeps_metadata(authenticator: Authenticator) -> None:
    def show_settings() -> str:
        """Render the settings page."""
        return "settings"

    handler = authenticator.users_only(show_settings)

    assert handler.__name__ == "show_settings"
    assert handler.__doc__ == "Render the settings page."

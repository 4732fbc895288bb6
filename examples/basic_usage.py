#!/usr/bin/env python3
"""
Basic gitgate usage example.

Wires an Authenticator to an in-memory lookup and a fake request, then walks
through the decisions the gates make.
Run with: python examples/basic_usage.py
"""

import logging

from gitgate import Account, Authenticator, GitGateError, Permission, configure_logging
from gitgate.testing import InMemoryResourceLookup, RequestState

configure_logging(level=logging.INFO, decision_level=logging.DEBUG)

print("=== gitgate Basic Usage Example ===\n")

# 1. Seed the data the platform would normally hold
lookup = InMemoryResourceLookup()
lookup.add_repository("alice", "blog", is_private=False)
lookup.add_repository("acme", "api", is_private=True)
lookup.add_group_member("acme", "bob", is_manager=True)
lookup.add_group_member("acme", "frank")
lookup.add_collaborator("acme", "api", "carol", Permission.WRITE)
lookup.add_collaborator("acme", "api", "dave", Permission.READ)

# 2. Stand-in for the web framework's request/session
request = RequestState()

gate = Authenticator.from_lookup(
    lookup,
    identity_provider=request.identity,
    path_provider=request.current_path,
)


@gate.owner_only
def repository_settings(repository):
    return f"settings of {repository.full_name}"


@gate.collaborators_only_with_form
def push_commit(form, repository):
    return f"pushed {form['sha']} to {repository.full_name}"


@gate.referrers_only
def show_repository(repository):
    return f"viewing {repository.full_name}"


def attempt(label, handler, *args):
    try:
        print(f"   {label}: {handler(*args)}")
    except GitGateError as e:
        print(f"   {label}: denied with {getattr(e, 'status_code', '?')} [{e.code}]")


print("1. Guest access...")
request.path = "/alice/blog"
attempt("guest views public repo", show_repository)
request.path = "/acme/api"
attempt("guest views private repo", show_repository)
request.path = "/acme/missing"
attempt("guest views missing repo", show_repository)

print("\n2. Group and collaborator access to acme/api...")
request.path = "/acme/api/settings"
for user in ("bob", "frank", "carol", "dave"):
    request.account = Account(user)
    attempt(f"{user} opens settings", repository_settings)
    attempt(f"{user} pushes", push_commit, {"sha": "abc123"})

print("\n3. Administrators...")
request.account = Account("root", is_admin=True)
attempt("root opens settings", repository_settings)

print("\n=== Done ===")

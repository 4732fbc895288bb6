"""gitgate - Authorization gates for Git-hosting controllers."""

from gitgate.context import IdentityContext, RequestPath, split_path
from gitgate.decision import Decision, Outcome
from gitgate.exceptions import (
    AuthorizationError,
    ConfigurationError,
    GitGateError,
    InvalidPathError,
    LookupFailedError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from gitgate.gate import Authenticator
from gitgate.http_lookup import HTTPResourceLookup
from gitgate.logging import configure_logging, get_logger
from gitgate.lookup import (
    CollaboratorResolver,
    GroupResolver,
    RepositoryResolver,
    ResourceLookup,
)
from gitgate.policies import Policy, PolicyEvaluator
from gitgate.transport import HTTPTransport, RetryConfig
from gitgate.types import (
    Account,
    CollaboratorGrant,
    GroupMember,
    Permission,
    RepositoryInfo,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Gates
    "Authenticator",
    "Policy",
    "PolicyEvaluator",
    # Decisions
    "Decision",
    "Outcome",
    # Request context
    "IdentityContext",
    "RequestPath",
    "split_path",
    # Lookups
    "RepositoryResolver",
    "GroupResolver",
    "CollaboratorResolver",
    "ResourceLookup",
    "HTTPResourceLookup",
    # Types
    "Account",
    "GroupMember",
    "Permission",
    "RepositoryInfo",
    "CollaboratorGrant",
    # Exceptions
    "GitGateError",
    "AuthorizationError",
    "NotFoundError",
    "InvalidPathError",
    "LookupFailedError",
    "RateLimitedError",
    "ServerError",
    "ConfigurationError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]

"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance
(PEP 544 structural typing).

Usage:
    from ambukit.domain.protocols import PolicyCacheProtocol, RoleRepository
"""

# Service protocols
from ambukit.domain.protocols.actor_protocol import ActorProtocol
from ambukit.domain.protocols.audit_protocol import AuditProtocol
from ambukit.domain.protocols.authorization_protocol import AuthorizationProtocol
from ambukit.domain.protocols.logger_protocol import LoggerProtocol
from ambukit.domain.protocols.policy_cache_protocol import (
    CacheHit,
    CacheStats,
    FillToken,
    PolicyCacheProtocol,
)

# Repository protocols
from ambukit.domain.protocols.policy_repository import PolicyRepository
from ambukit.domain.protocols.role_repository import RoleRepository

__all__ = [
    "ActorProtocol",
    "AuditProtocol",
    "AuthorizationProtocol",
    "CacheHit",
    "CacheStats",
    "FillToken",
    "LoggerProtocol",
    "PolicyCacheProtocol",
    "PolicyRepository",
    "RoleRepository",
]

"""Policy cache implementations.

Usage:
    from ambukit.infrastructure.cache import InMemoryPolicyCache, RedisPolicyCache
"""

from ambukit.infrastructure.cache.memory_policy_cache import InMemoryPolicyCache
from ambukit.infrastructure.cache.redis_policy_cache import RedisPolicyCache

__all__ = ["InMemoryPolicyCache", "RedisPolicyCache"]

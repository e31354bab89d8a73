# apps/infrastructure/resolution_cache.py
"""
Resolution Cache

Caches each owner's resolved prompt list in the Django cache framework.
Entries are dropped by the lifecycle manager on every write for that owner.

Each entry carries the owner's generation token from before the store
read. Invalidation writes a fresh token, so a fill that raced with an
edit is treated as a miss.
"""
import itertools
import logging
import threading
import uuid
from typing import Dict, List, Optional, Tuple

from django.core.cache import cache

from apps.domain.models import ResolvedPrompt

logger = logging.getLogger(__name__)

# Cache TTL for resolved prompts (5 minutes)
RESOLUTION_CACHE_TTL = 300


class DjangoResolutionCache:
    """
    Per-owner resolution cache backed by django.core.cache

    A TTL bounds staleness from catalog edits made outside the
    lifecycle manager (admin, seed command). Generation tokens are
    random and never expire, so an evicted token can't be reissued.
    """

    def __init__(self, ttl: int = RESOLUTION_CACHE_TTL):
        self.cache_prefix = "resolved_prompts:"
        self.generation_prefix = "resolved_prompts_gen:"
        self.ttl = ttl

    def generation(self, owner_id: str) -> str:
        """Get the owner's token, creating one if absent"""
        key = self._get_generation_key(owner_id)
        token = cache.get(key)
        if token is None:
            # add() keeps whichever token another process stored first
            cache.add(key, uuid.uuid4().hex, None)
            token = cache.get(key)
        return token

    def get(self, owner_id: str) -> Optional[List[ResolvedPrompt]]:
        """Get cached resolution or None"""
        entry = cache.get(self._get_cache_key(owner_id))
        if entry is None:
            return None

        token, prompts = entry
        if token != cache.get(self._get_generation_key(owner_id)):
            logger.debug(f"Discarding outdated resolution for owner={owner_id}")
            return None
        return prompts

    def set(self, owner_id: str, prompts: List[ResolvedPrompt], generation: str) -> None:
        """Cache resolution for an owner, tagged with its generation"""
        cache.set(self._get_cache_key(owner_id), (generation, list(prompts)), self.ttl)

    def invalidate(self, owner_id: str, prompt_id: Optional[str] = None) -> None:
        """
        Drop the owner's cached resolution and replace its token

        Args:
            owner_id: Owner whose customization changed
            prompt_id: Changed prompt, for logging only
        """
        cache.set(self._get_generation_key(owner_id), uuid.uuid4().hex, None)
        cache.delete(self._get_cache_key(owner_id))
        logger.debug(
            f"Invalidated resolution cache for owner={owner_id} prompt={prompt_id}"
        )

    def _get_cache_key(self, owner_id: str) -> str:
        """Generate cache key for owner"""
        return f"{self.cache_prefix}{owner_id}"

    def _get_generation_key(self, owner_id: str) -> str:
        """Generate generation-token key for owner"""
        return f"{self.generation_prefix}{owner_id}"


class InMemoryResolutionCache:
    """
    Dict-backed resolution cache for tests and single-process use
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[int, List[ResolvedPrompt]]] = {}
        self._generations: Dict[str, int] = {}
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def generation(self, owner_id: str) -> int:
        with self._lock:
            return self._generations.setdefault(owner_id, next(self._counter))

    def get(self, owner_id: str) -> Optional[List[ResolvedPrompt]]:
        with self._lock:
            entry = self._entries.get(owner_id)
            if entry is None or entry[0] != self._generations.get(owner_id):
                self.misses += 1
                return None
            self.hits += 1
            return list(entry[1])

    def set(self, owner_id: str, prompts: List[ResolvedPrompt], generation: int) -> None:
        with self._lock:
            self._entries[owner_id] = (generation, list(prompts))

    def invalidate(self, owner_id: str, prompt_id: Optional[str] = None) -> None:
        with self._lock:
            self._generations[owner_id] = next(self._counter)
            self._entries.pop(owner_id, None)

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._generations.clear()

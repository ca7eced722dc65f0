import copy
import functools
import os
import pickle
import sys
import time
import traceback
from dataclasses import dataclass
from hashlib import md5
from typing import Any, cast

from redis import Redis
from redis.exceptions import RedisError

from utils.get_logger import get_logger

# Fallback version used when the registry cannot be reached
RELEASE_VERSION = "1.0.0"

# Redis hash holding one version per cache prefix. Bumping a prefix's version
# invalidates every entry written under the previous one.
VERSION_REGISTRY_KEY = "__cache_versions__"

_logger = get_logger("rediscache.versions")


def get_cache_version(prefix: str) -> str:
    """Read the shared cache version for *prefix*, registering it on first use."""
    try:
        client = get_redis_client()
        raw = client.hget(VERSION_REGISTRY_KEY, prefix)
        if raw is None:
            client.hset(VERSION_REGISTRY_KEY, prefix, RELEASE_VERSION)
            _logger.info(f"Registered cache prefix '{prefix}' with version {RELEASE_VERSION}")
            return RELEASE_VERSION
        return raw.decode() if isinstance(raw, bytes) else str(raw)
    except RedisError as e:
        _logger.warning(f"Redis error reading version for '{prefix}': {e}")
        return RELEASE_VERSION


def set_cache_version(prefix: str, version: str) -> None:
    """Bust every entry under *prefix* without a deploy."""
    client = get_redis_client()
    client.hset(VERSION_REGISTRY_KEY, prefix, version)


# Cache is disabled in test environment unless explicitly enabled
DISABLE_CACHE = (
    os.getenv("ENVIRONMENT", "").lower() == "test"
    and os.getenv("ENABLE_CACHE_FOR_TESTS", "").lower() != "1"
)


@dataclass
class CacheEntry:
    expiry: int = 0
    data: Any = None
    size: int = 0
    data_type: str = ""
    key: str = ""
    function: str = ""
    version: str = "0.0"


_redis_client: Redis | None = None


def get_redis_client() -> Redis:
    """Singleton accessor for the synchronous Redis client."""
    global _redis_client
    if _redis_client is None:
        host = os.getenv("REDIS_HOST", "localhost")
        port_str = os.getenv("REDIS_PORT", "6379")
        password = os.getenv("REDIS_PASSWORD")

        try:
            port = int(port_str)
        except ValueError:
            raise RuntimeError(f"Invalid REDIS_PORT value: {port_str!r}")

        # decode_responses=False because values are pickled
        _redis_client = Redis(
            host=host,
            port=port,
            password=password,
            decode_responses=False,
            socket_timeout=5,
            socket_connect_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
    return _redis_client


class RedisCache:
    """
    Redis-backed cache for async functions using the SYNCHRONOUS Redis client.

    Redis round trips are ~1ms, so blocking inside the event loop is acceptable
    and avoids sharing an async connection pool across asyncio.run() calls.
    Any Redis failure degrades to a cache miss.
    """

    def __init__(
        self,
        defaultTTL: int = 3600,
        prefix: str = "cache",
        verbose: bool = False,
        isClassMethod: bool = True,
        allow_empty: bool = False,
        redis_client: Redis | None = None,
    ) -> None:
        # Redis() does not connect until the first command
        self._redis = redis_client if redis_client is not None else get_redis_client()
        self.defaultTTL = defaultTTL
        self.prefix = prefix
        self.isClassMethod = isClassMethod
        self.allow_empty = allow_empty
        self.disableCache = False
        self._version: str | None = None if redis_client is None else RELEASE_VERSION

        level = 10 if verbose else 30
        self.logging = get_logger(f"rediscache.{prefix}" if prefix else "rediscache", level=level)

    @property
    def version(self) -> str:
        """Registry version for this prefix, resolved on first cache access."""
        if self._version is None:
            self._version = get_cache_version(self.prefix)
        return self._version

    def getArgs(self, args) -> list[str]:
        ret = args[1:] if self.isClassMethod else args
        return [str(arg) for arg in ret]

    def get_cache_key(self, fn: str, prefix: str = "", args=None, kwargs=None) -> str:
        """Build a stable key from the function name and its arguments."""
        kwargs = kwargs or {}
        args = args or []

        reserved_keywords = {"expiry", "no_cache", "no_cache_update", "mutable"}
        func_keywords = {k: v for k, v in sorted(kwargs.items()) if k not in reserved_keywords}
        func_args = self.getArgs(args)

        cache_key = fn
        if func_keywords or func_args:
            cache_key = md5(
                str.encode(f"{fn}_{str(func_keywords)}{'-'.join(func_args)}")
            ).hexdigest()

        if prefix and not cache_key.startswith(prefix):
            cache_key = f"{prefix}_{cache_key}"
        return cache_key.replace(",", "-")

    def _full_key(self, key: str) -> str:
        if self.prefix and not key.startswith(self.prefix):
            return f"{self.prefix}:{key}"
        return key

    def filter_empty(self, entry: CacheEntry) -> CacheEntry | None:
        data = entry.data
        if data is None or (isinstance(data, (list, dict, set, str, bytes)) and len(data) == 0):
            return None
        return entry

    def add(self, data: Any, cache_key: str, funcName: str, expiry: float) -> CacheEntry | None:
        """Store *data* under *cache_key*. Errors and empty results are not stored."""
        entry = CacheEntry(
            expiry=int(expiry),
            data=data,
            size=sys.getsizeof(data),
            data_type=str(type(data)),
            key=cache_key,
            function=funcName,
            version=self.version,
        )

        if not self.allow_empty and self.filter_empty(entry) is None:
            return None
        if getattr(data, "error", None):
            return None

        ttl_seconds = self.defaultTTL if expiry == -1 else int(expiry - time.time())
        try:
            payload = pickle.dumps(entry, protocol=pickle.HIGHEST_PROTOCOL)
            storage_key = self._full_key(cache_key)
            if ttl_seconds > 0:
                self._redis.set(storage_key, payload, ex=ttl_seconds)
            else:
                self._redis.set(storage_key, payload)
            self.logging.debug(f"Added to Redis: {storage_key} (ttl={ttl_seconds})")
        except RedisError as e:
            self.logging.warning(f"Redis add error for {cache_key}: {e}")
            return None
        return entry

    def read(self, key: str, mutable: bool = True) -> CacheEntry | None:
        """Return the live entry for *key*, or None on miss, staleness or error."""
        try:
            raw = self._redis.get(self._full_key(key))
        except RedisError as e:
            self.logging.warning(f"Redis read failed for {key}: {e}")
            return None
        if raw is None:
            return None

        try:
            entry = pickle.loads(cast(bytes, raw))
        except (pickle.UnpicklingError, ModuleNotFoundError, AttributeError) as e:
            self.logging.debug(f"Stale cache entry for {key}: {e}")
            self.remove(key)
            return None

        if not isinstance(entry, CacheEntry):
            self.logging.warning(f"Invalid cache entry format for {key}")
            return None
        if self.version and entry.version != self.version:
            self.logging.info(f"Version mismatch for {key}: {entry.version} != {self.version}")
            self.remove(key)
            return None
        if entry.expiry != -1 and entry.expiry < time.time():
            self.remove(key)
            return None
        if not self.allow_empty and self.filter_empty(entry) is None:
            return None

        return entry if mutable else copy.deepcopy(entry)

    def remove(self, key: str):
        try:
            self._redis.delete(self._full_key(key))
        except RedisError as e:
            self.logging.warning(f"Redis delete failed for {key}: {e}")

    def clear(self):
        """Delete every key under this prefix."""
        if not self.prefix:
            self.logging.warning("Clear called without prefix - skipping for safety")
            return

        try:
            cursor = 0
            while True:
                cursor, keys = cast(
                    tuple[int, list[bytes]],
                    self._redis.scan(cursor=cursor, match=f"{self.prefix}:*", count=100),
                )
                if keys:
                    self._redis.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            self.logging.warning(f"Redis clear failed: {e}")

    def close(self):
        if self._redis:
            self._redis.close()

    @classmethod
    def use_cache(cls, instance: "RedisCache", prefix: str = ""):
        """
        Decorator caching the result of an async function.

        Accepts the extra keyword arguments ``no_cache``, ``no_cache_update``
        and ``expiry`` (seconds) on the decorated call.
        """

        def decorator(func):
            @functools.wraps(func)
            async def inner(*args, **kwargs):
                no_cache = kwargs.pop("no_cache", False)
                no_cache_update = kwargs.pop("no_cache_update", False)
                expiry_seconds = kwargs.pop("expiry", None)

                if DISABLE_CACHE or instance.disableCache or no_cache:
                    return await func(*args, **kwargs)

                cache_key = instance.get_cache_key(
                    fn=func.__name__, prefix=prefix, args=args, kwargs=kwargs
                )

                try:
                    cached = instance.read(cache_key)
                except Exception as err:
                    instance.logging.warning(f"Cache error {cache_key}: {err}")
                    instance.logging.debug(traceback.format_exc())
                    cached = None
                if cached is not None:
                    instance.logging.debug(f"Cache hit: {cache_key}")
                    return cached.data

                data = await func(*args, **kwargs)

                if not no_cache_update:
                    if expiry_seconds is not None:
                        expiry = time.time() + expiry_seconds
                    elif instance.defaultTTL == -1:
                        expiry = -1
                    else:
                        expiry = time.time() + instance.defaultTTL
                    instance.add(data, cache_key, funcName=func.__name__, expiry=expiry)

                return data

            return inner

        return decorator

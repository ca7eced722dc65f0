"""
Pytest utilities for testing.

Usage:
    from utils.pytest_utils import write_snapshot

    async def test_list_videos(self):
        result = await youtube_wrapper.list_videos(...)
        write_snapshot(result, "list_videos.json")
        # Creates: <tests dir>/snapshots_inspection/list_videos.json
"""

import fnmatch
import inspect
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, set):
        return sorted(data)
    raise TypeError(f"Object of type {type(data).__name__} is not JSON serializable")


def write_snapshot(data: Any, filename: str | None = None) -> Path:
    """Write data as formatted JSON next to the calling test for visual inspection.

    The tests directory is found by walking up from the calling file. Strings
    that parse as JSON are re-formatted; other strings are written as-is.

    Returns:
        Path to the created snapshot file
    """
    frame = inspect.currentframe()
    caller_frame = frame.f_back if frame else None
    if caller_frame is None:
        raise RuntimeError("Could not get caller frame")

    caller_file = Path(caller_frame.f_code.co_filename)
    tests_dir = next((parent for parent in caller_file.parents if parent.name == "tests"), None)
    if tests_dir is None:
        raise RuntimeError(f"Could not find 'tests' directory above {caller_file}")

    snapshot_dir = tests_dir / "snapshots_inspection"
    snapshot_dir.mkdir(parents=True, exist_ok=True)

    filename = filename or "result.json"
    if not filename.endswith(".json"):
        filename = f"{filename}.json"
    snapshot_path = snapshot_dir / filename

    with open(snapshot_path, "w", encoding="utf-8") as f:
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError:
                f.write(data)
                return snapshot_path
        json.dump(data, f, indent=2, sort_keys=True, ensure_ascii=False, default=_jsonable)

    return snapshot_path


class InMemoryRedis:
    """The subset of the redis-py client RedisCache calls, backed by dicts.

    Pass it as ``RedisCache(redis_client=InMemoryRedis())`` in unit tests.
    """

    def __init__(self):
        self.store: dict[str, bytes] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            key = key.decode() if isinstance(key, bytes) else key
            removed += self.store.pop(key, None) is not None
        return removed

    def scan(self, cursor=0, match="*", count=100):
        keys = [key.encode() for key in self.store if fnmatch.fnmatch(key, match)]
        return 0, keys

    def hget(self, name, key):
        value = self.hashes.get(name, {}).get(key)
        return value.encode() if value is not None else None

    def hset(self, name, key, value):
        self.hashes.setdefault(name, {})[key] = value
        return 1

    def close(self):
        pass

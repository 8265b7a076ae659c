from __future__ import annotations

import asyncio
import fcntl
import json
import os
from contextlib import contextmanager
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

LOCK_FILE_NAME = ".lock"


async def run_blocking(func: Callable[[], Any]) -> Any:
    """Run blocking file I/O in a worker thread."""
    return await asyncio.to_thread(func)


def atomic_write_text(path: Path, text: str) -> None:
    """Write through a temp file in the same directory, then rename over the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = None
    try:
        tmp = NamedTemporaryFile("w", encoding="utf-8", dir=str(path.parent), delete=False)
        tmp.write(text)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp.close()
        os.replace(tmp.name, path)
    finally:
        if tmp is not None and os.path.exists(tmp.name):
            os.unlink(tmp.name)


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def save_json(path: Path, obj: Any) -> None:
    atomic_write_text(path, json.dumps(obj, ensure_ascii=False, indent=2))


@contextmanager
def user_lock(user_dir: Path, *, exclusive: bool) -> Iterator[None]:
    """flock() on the user's lock file.

    Writers hold it exclusively; readers hold it shared so that a listing
    never interleaves with a multi-file write.
    """
    user_dir.mkdir(parents=True, exist_ok=True)
    with open(user_dir / LOCK_FILE_NAME, "a") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
        try:
            yield
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

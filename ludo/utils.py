"""Small helpers shared by the rest of the package."""

from __future__ import annotations

import io
import logging
import os
import sys
from collections.abc import Callable, Iterator, Sequence
from datetime import datetime
from typing import BinaryIO, TextIO

_CHUNK_SIZE = 32 * 1024

_CORE_EXTENSIONS = {
    "darwin": ".dylib",
    "linux": ".so",
    "win32": ".dll",
}


def index_of_string(element: str, data: Sequence[str]) -> int:
    """Return the position of ``element`` in ``data``, or 0 when it is absent."""
    return next((i for i, value in enumerate(data) if value == element), 0)


def _base_name(path: str) -> str:
    if not path:
        return "."
    separators = "/" + os.sep + (os.altsep or "")
    stripped = path.rstrip(separators)
    if not stripped:
        return os.sep
    cut = max(stripped.rfind(sep) for sep in set(separators))
    return stripped[cut + 1 :]


def file_name(path: str) -> str:
    """Return the name of a file without its directory and extension."""
    name = _base_name(path)
    dot = name.rfind(".")
    return name if dot < 0 else name[:dot]


def dated_name(path: str) -> str:
    """Return the file name with the current date and time appended."""
    stamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    return f"{file_name(path)}@{stamp}"


def capture_output(func: Callable[[], object]) -> str:
    """Run ``func`` and return everything it logged, one message per line."""
    buffer = io.StringIO()
    handler = logging.StreamHandler(buffer)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    try:
        func()
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
    return buffer.getvalue()


def _walk(path: str) -> Iterator[str]:
    try:
        with os.scandir(path) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(entry.path)
        elif not entry.name.startswith("."):
            yield entry.path


def all_files_in(directory: str | os.PathLike[str]) -> list[str]:
    """List every non-hidden file below ``directory``, in lexical walk order."""
    root = os.fspath(directory)
    info = os.lstat(root)
    if not os.path.isdir(root) or os.path.islink(root):
        name = os.path.basename(root)
        return [] if name.startswith(".") else [root]
    del info
    return list(_walk(root))


def core_ext() -> str:
    """Return the file extension of libretro cores on this operating system."""
    return next(
        (ext for prefix, ext in _CORE_EXTENSIONS.items() if sys.platform.startswith(prefix)),
        "",
    )


def lines_in_file(stream: BinaryIO | TextIO) -> int:
    """Count the newline characters read from ``stream``."""
    count = 0
    for chunk in iter(lambda: stream.read(_CHUNK_SIZE), None):
        if not chunk:
            break
        count += chunk.count(b"\n" if isinstance(chunk, bytes) else "\n")
    return count
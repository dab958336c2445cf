"""Reporting the memory use of the running process from its status file."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional, TextIO, Union

_FIELDS = ("VmData:", "VmSize:")


def _default_status_path() -> Path:
    return Path(f"/proc/{os.getpid()}/status")


def memory_usage(status_path: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """The ``VmData`` and ``VmSize`` values of a status file, in the order they appear.

    Without a path the running process's status file is read. An unreadable
    file gives an empty result.
    """
    path = Path(status_path) if status_path is not None else _default_status_path()
    try:
        text = path.read_text()
    except OSError:
        return {}
    usage: Dict[str, str] = {}
    tokens = iter(text.split())
    for token in tokens:
        if token in _FIELDS:
            value = next(tokens, None)
            if value is None:
                break
            usage[token[:-1]] = value
    return usage


def print_memory_usage(
    stream: Optional[TextIO] = None, status_path: Optional[Union[str, Path]] = None
) -> None:
    """Write the memory use as ``#Name:<tab>value`` lines, to standard error by default."""
    out = stream if stream is not None else sys.stderr
    for name, value in memory_usage(status_path).items():
        out.write(f"#{name}:\t{value}\n")
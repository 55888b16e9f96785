"""Shared output utilities for CLI verbs."""

import asyncio
import json
import sys
from typing import Any, Coroutine, Dict


def run_async(coro: Coroutine) -> Any:
    """Run an async coroutine from sync context."""
    return asyncio.run(coro)


def print_result(result: Dict, compact: bool = False) -> None:
    """Print a result dict as JSON to stdout."""
    indent = None if compact else 2
    print(json.dumps(result, indent=indent, default=str))


def die(msg: str, code: int = 1) -> None:
    """Print error to stderr and exit."""
    print(f"error: {msg}", file=sys.stderr)
    sys.exit(code)


def emit(result: Dict, as_json: bool = False) -> None:
    """Print a tool result, exiting non-zero on an error payload."""
    if result.get("status") != "success":
        if as_json:
            print_result(result)
            sys.exit(1)
        die(result.get("error", "unknown error"))
    if as_json:
        print_result({k: v for k, v in result.items() if k != "screenshot"})
    else:
        print(result["text"])

#!/usr/bin/env python3
"""CLI over an in-memory B-Tree (reads commands from STDIN, writes to STDOUT)."""

import sys
import shlex
from typing import List, Callable, Dict, Optional

from config import Settings, get_logger
from engine import TreeEngine
from errors import BTreeError, InvariantViolationError

_logger = get_logger("main")

# -------------------- Command & message constants --------------------
CMD_SET   = "SET"
CMD_GET   = "GET"
CMD_DEL   = "DEL"
CMD_SCAN  = "SCAN"
CMD_STATS = "STATS"
CMD_DUMP  = "DUMP"
CMD_EXIT  = "EXIT"

MSG_OK               = "OK"
ERR_SYNTAX           = "ERR syntax"
ERR_UNKNOWN_CMD      = "ERR unknown command"
ERR_USAGE_SET        = "ERR usage: SET <key> <value>"
ERR_USAGE_GET        = "ERR usage: GET <key>"
ERR_USAGE_DEL        = "ERR usage: DEL <key>"
ERR_USAGE_NOARGS     = "ERR usage: command takes no arguments"
ERR_INTERNAL         = "ERR internal"


def _print(line: str) -> None:
    """Write a single line to STDOUT and flush."""
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


# -------------------- Command handlers --------------------
def handle_set(args: List[str], tree: TreeEngine) -> None:
    """SET <key> <value...>  ->  OK"""
    if len(args) < 2:
        _print(ERR_USAGE_SET)
        return
    tree.set(tree.parse_key(args[0]), " ".join(args[1:]))
    _print(MSG_OK)


def handle_get(args: List[str], tree: TreeEngine) -> None:
    """GET <key>  ->  value | (empty line if missing)"""
    if len(args) != 1:
        _print(ERR_USAGE_GET)
        return
    val = tree.get(tree.parse_key(args[0]))
    _print("" if val is None else str(val))


def handle_del(args: List[str], tree: TreeEngine) -> None:
    """DEL <key>  ->  1 if deleted | 0 if missing"""
    if len(args) != 1:
        _print(ERR_USAGE_DEL)
        return
    _print("1" if tree.delete(tree.parse_key(args[0])) else "0")


def handle_scan(args: List[str], tree: TreeEngine) -> None:
    """SCAN  ->  one 'key value' line per entry, ascending"""
    if args:
        _print(ERR_USAGE_NOARGS)
        return
    for k, v in tree.items():
        _print(f"{k} {v}")


def handle_stats(args: List[str], tree: TreeEngine) -> None:
    """STATS  ->  'name=value' pairs on one line"""
    if args:
        _print(ERR_USAGE_NOARGS)
        return
    _print(" ".join(f"{k}={v}" for k, v in tree.stats().items()))


def handle_dump(args: List[str], tree: TreeEngine) -> None:
    """DUMP  ->  tree levels, one per line"""
    if args:
        _print(ERR_USAGE_NOARGS)
        return
    for line in tree.dump().splitlines():
        _print(line)


def handle_exit(args: List[str], tree: TreeEngine) -> str:
    """EXIT -> signal main loop to terminate."""
    return "EXIT"


DISPATCH: Dict[str, Callable[[List[str], TreeEngine], Optional[str]]] = {
    CMD_SET: handle_set,
    CMD_GET: handle_get,
    CMD_DEL: handle_del,
    CMD_SCAN: handle_scan,
    CMD_STATS: handle_stats,
    CMD_DUMP: handle_dump,
    CMD_EXIT: handle_exit,
}


def _parse_command(line: str) -> Optional[List[str]]:
    """Split a raw input line into tokens (cmd + args) using shell-like rules.

    Returns:
        tokens list on success, or None if parsing fails (e.g., unbalanced quotes).
    """
    try:
        return shlex.split(line)
    except ValueError:
        return None


def main(argv: List[str]) -> int:
    """Run the REPL loop.

    Args:
        argv: Command-line arguments; argv[1] may override the branching degree.
    """
    try:
        settings = Settings.from_env()
        if len(argv) >= 2:
            settings.degree = int(argv[1])
        tree = TreeEngine(settings)
    except (BTreeError, ValueError) as e:
        _print(f"ERR {e}")
        return 2

    while True:
        try:
            raw = sys.stdin.readline()
            if not raw:  # EOF → clean exit
                return 0
            line = raw.strip()
            if not line:
                continue

            tokens = _parse_command(line)
            if not tokens:
                _print(ERR_SYNTAX)
                continue

            handler = DISPATCH.get(tokens[0].upper())
            if handler is None:
                _print(ERR_UNKNOWN_CMD)
                continue

            if handler(tokens[1:], tree) == "EXIT":
                return 0

        except KeyboardInterrupt:
            return 0
        except InvariantViolationError:
            # The tree may be corrupt; do not keep serving it.
            _logger.critical("tree invariant violated", exc_info=True)
            raise
        except (BTreeError, ValueError) as e:
            _logger.warning("command failed: %s", e)
            _print(f"ERR {e}")
        except Exception:
            # Tracebacks go to STDERR only; STDOUT stays line-clean.
            _logger.exception("internal error")
            _print(ERR_INTERNAL)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))

"""Argument-pattern dispatch.

Usage:
    from cmdbox.dispatch import ActionRegistry

    registry = ActionRegistry()
    registry.register("hello", run=lambda m: print("world"))
    sys.exit(registry.dispatch(sys.argv[1:]))
"""

from cmdbox.dispatch.registry import (
    Action,
    ActionRegistry,
    Handler,
    Pattern,
    RegisterFunction,
    pattern_source,
)

__all__ = [
    "Action",
    "ActionRegistry",
    "Handler",
    "Pattern",
    "RegisterFunction",
    "pattern_source",
]

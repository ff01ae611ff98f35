"""Filesystem scanning utilities."""

import os
from dataclasses import dataclass
from pathlib import Path

NODE_MODULES = "node_modules"


@dataclass(frozen=True)
class BrokenNodeModule:
    """A package whose install left a ``.<name>-<hash>`` sibling behind.

    Attributes:
        name: Package name, including the scope (``@scope/pkg``).
        garbage: Path of the leftover directory.
    """

    name: str
    garbage: Path


def _safe_listdir(path: Path) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except OSError:
        return []


def _find_garbage(names: list[str], name: str) -> str | None:
    prefix = f".{name}-"
    return next((n for n in names if n.startswith(prefix)), None)


def scan_broken_node_modules(
    base: Path | str = ".",
    result: list[BrokenNodeModule] | None = None,
) -> list[BrokenNodeModule]:
    """Find leftovers of interrupted package installs under ``base``.

    Walks ``base/node_modules`` and every nested ``node_modules`` below the
    packages it contains, including scoped (``@scope``) directories.
    Unreadable directories are treated as empty.

    Args:
        base: Project directory that holds ``node_modules``.
        result: Accumulator used by the recursion.

    Returns:
        Broken modules in directory order.
    """
    if result is None:
        result = []
    modules = Path(base) / NODE_MODULES
    names = _safe_listdir(modules)

    for name in names:
        if name.startswith("@"):
            scoped_names = _safe_listdir(modules / name)
            for scoped in scoped_names:
                if scoped.startswith("."):
                    continue
                garbage = _find_garbage(scoped_names, scoped)
                if garbage:
                    result.append(
                        BrokenNodeModule(f"{name}/{scoped}", modules / name / garbage)
                    )
                scan_broken_node_modules(modules / name / scoped, result)
        elif not name.startswith("."):
            garbage = _find_garbage(names, name)
            if garbage:
                result.append(BrokenNodeModule(name, modules / garbage))
            scan_broken_node_modules(modules / name, result)

    return result

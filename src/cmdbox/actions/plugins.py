"""Loading private action modules from the plugins directory."""

import importlib.util
from pathlib import Path

from cmdbox.actions.context import ActionContext
from cmdbox.dispatch import RegisterFunction
from cmdbox.exceptions import PluginError, PluginLoadError, PluginNotFoundError
from cmdbox.utils.logging import get_logger

log = get_logger(__name__)


def load_plugin(path: Path, register: RegisterFunction, ctx: ActionContext) -> None:
    """Import ``path`` and call its ``install(register, ctx)``.

    Raises:
        PluginNotFoundError: If ``path`` is not a file.
        PluginLoadError: If the module cannot be imported or has no
            callable ``install``.
    """
    if not path.is_file():
        raise PluginNotFoundError(f"No plugin at {path}")

    module_name = f"cmdbox_plugin_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PluginLoadError(f"Cannot load {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise PluginLoadError(f"Error importing {path}: {e}") from e

    install = getattr(module, "install", None)
    if not callable(install):
        raise PluginLoadError(f"{path} does not define install(register, ctx)")
    try:
        install(register, ctx)
    except Exception as e:
        raise PluginLoadError(f"install() of {path} failed: {e}") from e


def load_plugins(
    directory: Path, register: RegisterFunction, ctx: ActionContext
) -> list[str]:
    """Load every ``*.py`` module in ``directory``, in name order.

    Modules starting with an underscore are ignored. A module that fails to
    load is logged and skipped so one broken plugin cannot disable the tool.

    Returns:
        Names of the plugins that were installed.
    """
    if not directory.is_dir():
        return []

    loaded = []
    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_"):
            continue
        try:
            load_plugin(path, register, ctx)
        except PluginError as e:
            log.warning("Skipping plugin %s: %s", path.name, e)
            continue
        loaded.append(path.stem)
    log.debug("Loaded plugins: %s", loaded)
    return loaded

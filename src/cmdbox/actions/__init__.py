"""Built-in actions and plugin loading.

An action module exposes ``install(register, ctx)`` and registers its
handlers with ``register(*patterns, run=handler, description=...)``.
Private modules placed in the plugins directory follow the same contract.
"""

from collections.abc import Callable

from cmdbox.actions import fonts, llm, system
from cmdbox.actions.context import ActionContext, create_provider, create_renderer
from cmdbox.actions.plugins import load_plugin, load_plugins
from cmdbox.config.defaults import DEFAULT_PLUGINS_DIR
from cmdbox.dispatch import ActionRegistry, RegisterFunction

Installer = Callable[[RegisterFunction, ActionContext], None]

BUILTIN_INSTALLERS: list[Installer] = [
    system.install,
    fonts.install,
    llm.install,
]


def build_registry(ctx: ActionContext, *, plugins: bool = True) -> ActionRegistry:
    """Create a registry with the built-in actions followed by plugins."""
    registry = ActionRegistry(console=ctx.console, err_console=ctx.err_console)
    for installer in BUILTIN_INSTALLERS:
        installer(registry.register, ctx)

    plugin_config = ctx.config.plugins
    if plugins and plugin_config.enabled:
        directory = (plugin_config.directory or DEFAULT_PLUGINS_DIR).expanduser()
        load_plugins(directory, registry.register, ctx)
    return registry


__all__ = [
    "ActionContext",
    "BUILTIN_INSTALLERS",
    "Installer",
    "build_registry",
    "create_provider",
    "create_renderer",
    "load_plugin",
    "load_plugins",
]

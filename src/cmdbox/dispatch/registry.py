"""Pattern registry that maps argument vectors to actions."""

import asyncio
import inspect
import re
from collections.abc import Awaitable, Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from rich.console import Console
from rich.markup import escape

from cmdbox.exceptions import ActionNotFoundError, CmdBoxError, InvalidPatternError
from cmdbox.utils.logging import get_logger
from cmdbox.utils.table import build_table

log = get_logger(__name__)

Pattern = str | re.Pattern[str]
Handler = Callable[..., Any]
H = TypeVar("H", bound=Handler)


class RegisterFunction(Protocol):
    """Signature of ``ActionRegistry.register`` as handed to installers."""

    def __call__(
        self, *patterns: Pattern, run: Handler, description: str | None = None
    ) -> None: ...


def _match_one(pattern: Pattern, arg: str) -> re.Match[str] | None:
    if isinstance(pattern, str):
        # Equality only; the match spans the whole argument.
        return re.fullmatch(re.escape(pattern), arg)
    return pattern.search(arg)


def pattern_source(pattern: Pattern) -> str:
    """Human-readable form of a pattern: strings verbatim, regexes as /src/."""
    if isinstance(pattern, str):
        return pattern
    return f"/{pattern.pattern}/"


@dataclass(frozen=True)
class Action:
    """A registered action.

    Attributes:
        patterns: One pattern per leading argument.
        handler: Called with one match per pattern, then the remaining args.
            May be a coroutine function.
        description: One-line help text.
    """

    patterns: tuple[Pattern, ...]
    handler: Handler
    description: str | None = None

    def match(self, argv: Sequence[str]) -> list[re.Match[str]] | None:
        """Return one match per pattern, or None if any argument fails."""
        if len(argv) < len(self.patterns):
            return None
        matches = []
        for pattern, arg in zip(self.patterns, argv):
            m = _match_one(pattern, arg)
            if m is None:
                return None
            matches.append(m)
        return matches

    @property
    def usage(self) -> str:
        return " ".join(pattern_source(p) for p in self.patterns)


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class ActionRegistry:
    """Ordered collection of actions; the first matching action wins.

    Usage:
        registry = ActionRegistry()

        @registry.action("hello", description="Say hello")
        def hello(_m):
            print("world")

        registry.register(re.compile(r"^(chat|ask)$"), run=chat)

        exit_code = registry.dispatch(sys.argv[1:])
    """

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self._actions: list[Action] = []
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def register(
        self,
        *patterns: Pattern,
        run: Handler,
        description: str | None = None,
    ) -> None:
        """Register ``run`` for argument vectors matching ``patterns``.

        Raises:
            InvalidPatternError: If no pattern is given, a pattern is neither a
                string nor a compiled regex, or ``run`` is not callable.
        """
        if not patterns:
            raise InvalidPatternError("An action needs at least one pattern")
        for pattern in patterns:
            if not isinstance(pattern, (str, re.Pattern)):
                raise InvalidPatternError(
                    f"Pattern must be a string or compiled regex, got {pattern!r}"
                )
        if not callable(run):
            raise InvalidPatternError(f"Handler for {patterns!r} is not callable")

        action = Action(tuple(patterns), run, description)
        self._actions.append(action)
        log.debug("Registered action %s", action.usage)

    def action(
        self, *patterns: Pattern, description: str | None = None
    ) -> Callable[[H], H]:
        """Decorator form of :meth:`register`."""

        def decorator(handler: H) -> H:
            self.register(*patterns, run=handler, description=description)
            return handler

        return decorator

    def match(
        self, argv: Sequence[str]
    ) -> tuple[Action, list[re.Match[str]], list[str]] | None:
        """Find the first action matching ``argv``.

        Returns:
            ``(action, matches, rest)`` where ``rest`` holds the arguments
            after the matched ones, or None.
        """
        for action in self._actions:
            matches = action.match(argv)
            if matches is not None:
                return action, matches, list(argv[len(matches) :])
        return None

    def describe(self) -> list[dict[str, str]]:
        """Usage rows for every action, in registration order."""
        return [
            {"Action": action.usage, "Description": action.description or ""}
            for action in self._actions
        ]

    def print_usage(self) -> None:
        if not self._actions:
            self.console.print("[dim]No actions registered[/dim]")
            return
        self.console.print(build_table(self.describe(), title="Actions"))

    def dispatch(self, argv: Sequence[str]) -> int:
        """Run the action matching ``argv`` and return an exit code.

        Handler errors are reported on stderr and converted to exit codes;
        they never propagate.

        Returns:
            0 on success (or an int returned by the handler), the error's
            ``exit_code`` for cmdbox errors, 1 for other exceptions, 130 on
            interrupt. Empty argv prints usage and returns 0.
        """
        if not argv:
            self.print_usage()
            return 0

        found = self.match(argv)
        if found is None:
            self.err_console.print(
                f"[red]Error:[/red] no action matches {escape(' '.join(argv))}"
            )
            self.print_usage()
            return ActionNotFoundError.exit_code

        action, matches, rest = found
        log.debug("Dispatching %s with %d extra args", action.usage, len(rest))
        try:
            result = action.handler(*matches, *rest)
            if inspect.isawaitable(result):
                result = asyncio.run(_await(result))
        except KeyboardInterrupt:
            self.err_console.print("[dim]Interrupted[/dim]")
            return 130
        except CmdBoxError as e:
            log.debug("Action %s failed", action.usage, exc_info=True)
            self.err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            return e.exit_code
        except Exception as e:
            log.debug("Action %s crashed", action.usage, exc_info=True)
            self.err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            return 1

        if isinstance(result, int) and not isinstance(result, bool):
            return result
        return 0

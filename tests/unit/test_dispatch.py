"""Tests for argument-pattern dispatch."""

import re
from io import StringIO

import pytest
from rich.console import Console

from cmdbox.dispatch import Action, ActionRegistry, pattern_source
from cmdbox.exceptions import (
    ActionError,
    DownloadError,
    InvalidPatternError,
)

# --- Fixtures ---


@pytest.fixture
def registry() -> ActionRegistry:
    """Create a registry whose consoles write to buffers."""
    return ActionRegistry(
        console=Console(file=StringIO(), width=200, no_color=True),
        err_console=Console(file=StringIO(), width=200, no_color=True),
    )


def stdout_of(registry: ActionRegistry) -> str:
    return registry.console.file.getvalue()


def stderr_of(registry: ActionRegistry) -> str:
    return registry.err_console.file.getvalue()


# --- Tests ---


class TestPatternMatching:
    """Tests for matching argument vectors against patterns."""

    def test_string_pattern_requires_equality(self) -> None:
        """Test that string patterns match the whole argument only."""
        action = Action(("hello",), lambda m: None)
        assert action.match(["hello"]) is not None
        assert action.match(["hello-world"]) is None
        assert action.match(["say-hello"]) is None

    def test_string_pattern_is_not_a_regex(self) -> None:
        """Test that regex metacharacters in strings are literal."""
        action = Action(("a.c",), lambda m: None)
        assert action.match(["a.c"]) is not None
        assert action.match(["abc"]) is None

    def test_regex_pattern_searches(self) -> None:
        """Test that compiled regexes use search semantics."""
        action = Action((re.compile(r"\.zip$"),), lambda m: None)
        matches = action.match(["archive.zip"])
        assert matches is not None
        assert matches[0].group(0) == ".zip"
        assert action.match(["archive.tar"]) is None

    def test_multiple_patterns(self) -> None:
        """Test that each pattern consumes one leading argument."""
        action = Action(("git", re.compile(r"^(co|checkout)$")), lambda *a: None)
        matches = action.match(["git", "co", "main"])
        assert matches is not None
        assert [m.group(0) for m in matches] == ["git", "co"]
        assert action.match(["git"]) is None
        assert action.match(["git", "push"]) is None

    def test_usage(self) -> None:
        """Test usage text for mixed patterns."""
        action = Action(("unzip", re.compile(r"\.zip$", re.I)), lambda *a: None)
        assert action.usage == r"unzip /\.zip$/"

    def test_pattern_source(self) -> None:
        """Test readable pattern forms."""
        assert pattern_source("hello") == "hello"
        assert pattern_source(re.compile("^nm$")) == "/^nm$/"


class TestActionRegistry:
    """Tests for ActionRegistry registration and lookup."""

    def test_register(self, registry: ActionRegistry) -> None:
        """Test registering actions keeps order."""
        registry.register("a", run=lambda m: None)
        registry.register("b", run=lambda m: None, description="second")

        assert len(registry) == 2
        assert [a.usage for a in registry] == ["a", "b"]
        assert list(registry)[1].description == "second"

    def test_action_decorator(self, registry: ActionRegistry) -> None:
        """Test the decorator registers and returns the handler."""

        @registry.action("hello", description="Say hello")
        def hello(match):
            return 0

        assert hello(None) == 0
        assert len(registry) == 1
        assert list(registry)[0].handler is hello

    def test_register_without_patterns(self, registry: ActionRegistry) -> None:
        """Test that at least one pattern is required."""
        with pytest.raises(InvalidPatternError):
            registry.register(run=lambda: None)

    def test_register_invalid_pattern(self, registry: ActionRegistry) -> None:
        """Test that non-string, non-regex patterns are rejected."""
        with pytest.raises(InvalidPatternError) as exc_info:
            registry.register(42, run=lambda m: None)
        assert exc_info.value.exit_code == 42

    def test_register_uncallable_handler(self, registry: ActionRegistry) -> None:
        """Test that handlers must be callable."""
        with pytest.raises(InvalidPatternError):
            registry.register("x", run="not callable")

    def test_first_match_wins(self, registry: ActionRegistry) -> None:
        """Test that earlier registrations take precedence."""
        registry.register(re.compile("^h"), run=lambda m: "regex")
        registry.register("hello", run=lambda m: "exact")

        found = registry.match(["hello"])
        assert found is not None
        action, _, _ = found
        assert action.usage == "/^h/"

    def test_match_returns_rest(self, registry: ActionRegistry) -> None:
        """Test that unmatched trailing args are returned."""
        registry.register("md", re.compile("."), run=lambda *a: None)

        found = registry.match(["md", "README.md", "--plain", "x"])
        assert found is not None
        _, matches, rest = found
        assert len(matches) == 2
        assert rest == ["--plain", "x"]

    def test_no_match(self, registry: ActionRegistry) -> None:
        registry.register("hello", run=lambda m: None)
        assert registry.match(["goodbye"]) is None

    def test_describe(self, registry: ActionRegistry) -> None:
        """Test usage rows."""
        registry.register("hello", run=lambda m: None, description="Say hello")
        registry.register(re.compile("^(nm|node-modules)$"), run=lambda m: None)

        assert registry.describe() == [
            {"Action": "hello", "Description": "Say hello"},
            {"Action": "/^(nm|node-modules)$/", "Description": ""},
        ]


class TestDispatch:
    """Tests for ActionRegistry.dispatch."""

    def test_handler_receives_matches_then_rest(
        self, registry: ActionRegistry
    ) -> None:
        """Test handler call convention."""
        received = []

        def handler(*args):
            received.extend(args)

        registry.register(re.compile(r"^(chat|ask)$"), run=handler)

        assert registry.dispatch(["ask", "why", "now"]) == 0
        assert isinstance(received[0], re.Match)
        assert received[0].group(1) == "ask"
        assert received[1:] == ["why", "now"]

    def test_int_return_becomes_exit_code(self, registry: ActionRegistry) -> None:
        registry.register("fail", run=lambda m: 3)
        assert registry.dispatch(["fail"]) == 3

    def test_non_int_return_is_success(self, registry: ActionRegistry) -> None:
        registry.register("s", run=lambda m: "done")
        registry.register("b", run=lambda m: False)
        assert registry.dispatch(["s"]) == 0
        assert registry.dispatch(["b"]) == 0

    def test_async_handler(self, registry: ActionRegistry) -> None:
        """Test coroutine handlers are run to completion."""
        calls = []

        async def handler(match, *args):
            calls.append(args)
            return 7

        registry.register("async", run=handler)

        assert registry.dispatch(["async", "x"]) == 7
        assert calls == [("x",)]

    def test_cmdbox_error_exit_code(self, registry: ActionRegistry) -> None:
        """Test that cmdbox errors map to their exit codes."""

        def handler(match):
            raise DownloadError("mirror unreachable")

        registry.register("dl", run=handler)

        assert registry.dispatch(["dl"]) == 60
        assert "mirror unreachable" in stderr_of(registry)
        assert stdout_of(registry) == ""

    def test_async_cmdbox_error(self, registry: ActionRegistry) -> None:
        async def handler(match):
            raise ActionError("bad input")

        registry.register("x", run=handler)
        assert registry.dispatch(["x"]) == 40

    def test_unexpected_error(self, registry: ActionRegistry) -> None:
        """Test that other exceptions exit with 1."""

        def handler(match):
            raise RuntimeError("boom [not markup]")

        registry.register("crash", run=handler)

        assert registry.dispatch(["crash"]) == 1
        assert "boom [not markup]" in stderr_of(registry)

    def test_keyboard_interrupt(self, registry: ActionRegistry) -> None:
        def handler(match):
            raise KeyboardInterrupt

        registry.register("wait", run=handler)

        assert registry.dispatch(["wait"]) == 130
        assert "Interrupted" in stderr_of(registry)

    def test_no_match_prints_usage(self, registry: ActionRegistry) -> None:
        """Test the unmatched path."""
        registry.register("hello", run=lambda m: None, description="Say hello")

        assert registry.dispatch(["nope", "x"]) == 41
        assert "no action matches nope x" in stderr_of(registry)
        assert "Say hello" in stdout_of(registry)

    def test_empty_argv_prints_usage(self, registry: ActionRegistry) -> None:
        """Test that no arguments lists actions."""
        registry.register("hello", run=lambda m: None, description="Say hello")

        assert registry.dispatch([]) == 0
        output = stdout_of(registry)
        assert "Actions" in output
        assert "hello" in output
        assert "Say hello" in output

    def test_empty_registry_usage(self, registry: ActionRegistry) -> None:
        assert registry.dispatch([]) == 0
        assert "No actions registered" in stdout_of(registry)

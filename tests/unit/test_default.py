"""Unit tests for the default registry and module-level shortcuts."""

import pytest

from hookmgr import HookNotFoundError, InvalidArgumentError, default_registry, get_registry, hook
from hookmgr.hooks import HookRegistry, default


class TestDefaultRegistry:
    """Tests for the process-wide registry shortcuts."""

    def test_get_registry(self):
        """get_registry returns the shared instance."""
        assert get_registry() is default_registry
        assert isinstance(default_registry, HookRegistry)

    def test_shortcuts_delegate(self):
        """Module functions operate on the default registry."""
        default.add_action("greet", lambda name: f"hello {name}")
        default.add_actions("greet", [lambda name: f"hi {name}"])

        assert default.exists("greet") is True
        assert default.count("greet") == 2
        assert len(default.get_callables("greet")) == 2
        assert len(default.get_descriptors("greet")) == 2
        assert default.get_hooks() == ["greet"]
        assert default.apply("greet", ["x"]) == "hi x"
        assert default_registry.count("greet") == 2
        assert "greet : (fcn)" in default.to_string()

        default.remove("greet")
        assert default.exists("greet") is False

    def test_set_actions_and_init(self):
        """set_actions replaces and init clears the default registry."""
        default.add_action("old", lambda: None)
        default.set_actions({"new": lambda: "new"})

        assert default.get_hooks() == ["new"]
        assert default.apply("new") == "new"

        default.init()
        assert default.get_hooks() == []
        with pytest.raises(HookNotFoundError):
            default.apply("new")

    def test_blank_hook(self):
        with pytest.raises(InvalidArgumentError):
            default.add_action("   ", lambda: None)
        assert default.count("") == 0


class TestHookDecorator:
    """Tests for the @hook decorator."""

    def test_registers_on_default_registry(self):
        """@hook registers the function and returns it unchanged."""

        @hook("user.created")
        def send_welcome(user, outbox):
            outbox.append(f"welcome {user}")
            return "sent"

        outbox = []

        assert default.get_callables("user.created") == [send_welcome]
        assert default.apply("user.created", ["ann", outbox]) == "sent"
        assert outbox == ["welcome ann"]

    def test_registers_on_given_registry(self):
        """@hook can target another registry."""
        registry = HookRegistry()

        @hook("local", registry=registry)
        def handler():
            return "local"

        assert registry.apply("local") == "local"
        assert default.exists("local") is False

    def test_empty_registry_is_still_the_target(self):
        """An empty registry passed to @hook receives the handler."""
        registry = HookRegistry()
        assert len(registry) == 0

        @hook("scoped", registry=registry)
        def handler():
            return "scoped"

        assert registry.get_callables("scoped") == [handler]
        assert default_registry.get_hooks() == []

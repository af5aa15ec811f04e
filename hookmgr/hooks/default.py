"""Process-wide default registry and module-level shortcuts."""

from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from .registry import HookRegistry
from .types import CallableDescriptor

default_registry = HookRegistry()


def get_registry() -> HookRegistry:
    """Return the process-wide default registry."""
    return default_registry


def hook(name: str, registry: Optional[HookRegistry] = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to register a function under a hook.

    Usage:
        @hook("user.created")
        def send_welcome(user, outbox):
            outbox.append(f"welcome {user}")

    Parameters
    ----------
    name : str
        Hook to register under.
    registry : HookRegistry, optional
        Registry to use instead of the default one.
    """
    return (default_registry if registry is None else registry).action(name)


def add_action(hook: str, handler: Any) -> None:
    default_registry.add_action(hook, handler)


def add_actions(hook: str, handlers: Iterable[Any]) -> None:
    default_registry.add_actions(hook, handlers)


def set_actions(actions: Mapping[str, Any]) -> None:
    default_registry.set_actions(actions)


def apply(
    hook: str,
    args: Optional[Sequence[Any]] = None,
    kwargs: Optional[Mapping[str, Any]] = None,
) -> Any:
    return default_registry.apply(hook, args, kwargs)


def count(hook: str) -> int:
    return default_registry.count(hook)


def exists(hook: str) -> bool:
    return default_registry.exists(hook)


def get_callables(hook: str) -> list[Any]:
    return default_registry.get_callables(hook)


def get_descriptors(hook: str) -> tuple[CallableDescriptor, ...]:
    return default_registry.get_descriptors(hook)


def get_hooks() -> list[str]:
    return default_registry.get_hooks()


def init() -> None:
    default_registry.init()


def remove(hook: str) -> None:
    default_registry.remove(hook)


def to_string() -> str:
    return default_registry.to_string()

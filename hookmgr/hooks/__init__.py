"""Hook registry and dispatch."""

from .default import default_registry, get_registry, hook
from .registry import HookRegistry
from .types import CallableDescriptor, HandlerKind, describe, render, render_value, resolve

__all__ = [
    "HookRegistry",
    "CallableDescriptor",
    "HandlerKind",
    "default_registry",
    "get_registry",
    "hook",
    "describe",
    "render",
    "render_value",
    "resolve",
]

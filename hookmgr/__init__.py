# Named hook registry

from .exceptions import HookError, HookNotFoundError, InvalidArgumentError, NotInvocableError
from .hooks import CallableDescriptor, HandlerKind, HookRegistry, default_registry, get_registry, hook

__all__ = [
    "HookRegistry",
    "CallableDescriptor",
    "HandlerKind",
    "HookError",
    "HookNotFoundError",
    "InvalidArgumentError",
    "NotInvocableError",
    "default_registry",
    "get_registry",
    "hook",
]

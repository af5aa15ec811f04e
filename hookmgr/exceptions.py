"""Exceptions raised by the hook registry."""

from typing import Any, Optional


class HookError(Exception):
    """Base class for hook registry errors."""

    pass


class InvalidArgumentError(HookError, ValueError):
    """Raised when a hook name or handler is rejected at registration."""

    def __init__(self, message: str, hook: Optional[str] = None, handler: Any = None):
        self.hook = hook
        self.handler = handler
        super().__init__(message)


class HookNotFoundError(HookError, LookupError):
    """Raised when applying a hook that has no registered handlers."""

    def __init__(self, hook: str):
        self.hook = hook
        super().__init__(f"Invalid/unFound hook (string) : {hook!r}")


class NotInvocableError(HookError, TypeError):
    """Raised when a registered handler cannot be resolved at invocation time."""

    def __init__(self, hook: str, descriptor: Any, label: str, reason: str = ""):
        self.hook = hook
        self.descriptor = descriptor
        self.label = label
        self.reason = reason
        message = f"Invalid {hook} : {label}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

"""Hook registry mapping hook names to ordered handler lists."""

import threading
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Sequence

from loguru import logger

from ..config import config
from ..exceptions import HookNotFoundError, InvalidArgumentError, NotInvocableError
from .types import CallableDescriptor, describe, render, resolve


class HookRegistry:
    """Registers handlers under hook names and invokes them in order.

    Hook names are kept in sorted order. Handlers under one hook are invoked
    in the order they were registered, all with the same arguments, and the
    last handler's result is returned.

    Handlers are only checked for shape when registered; functions, types and
    methods they name are looked up on each ``apply``. Set ``eager_resolve``
    (or ``HOOKMGR_EAGER_RESOLVE``) to look them up at registration instead.
    """

    def __init__(
        self,
        eager_resolve: Optional[bool] = None,
        max_hook_name_length: Optional[int] = None,
    ) -> None:
        """Initialize an empty registry.

        Parameters
        ----------
        eager_resolve : bool, optional
            Resolve handlers at registration time. Defaults to config.
        max_hook_name_length : int, optional
            Longest accepted hook name. Defaults to config.
        """
        self.eager_resolve = config.EAGER_RESOLVE if eager_resolve is None else eager_resolve
        self.max_hook_name_length = (
            config.MAX_HOOK_NAME_LENGTH if max_hook_name_length is None else max_hook_name_length
        )
        self._actions: dict[str, list[CallableDescriptor]] = {}
        self._lock = threading.RLock()

    def __enter__(self) -> "HookRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __contains__(self, hook: object) -> bool:
        return isinstance(hook, str) and self.exists(hook)

    def __len__(self) -> int:
        with self._lock:
            return len(self._actions)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"HookRegistry(hooks={self.get_hooks()!r})"

    def _validate_hook(self, hook: Any, handler: Any) -> None:
        if not isinstance(hook, str) or not hook.strip():
            raise InvalidArgumentError(
                f"Invalid/unFound hook (string) : {hook!r}", hook=hook, handler=handler
            )
        if len(hook) > self.max_hook_name_length:
            raise InvalidArgumentError(
                f"Hook name too long (max {self.max_hook_name_length} characters)",
                hook=hook,
                handler=handler,
            )

    def add_action(self, hook: str, handler: Any) -> None:
        """Register a single handler under a hook.

        Parameters
        ----------
        hook : str
            Non-blank hook name. Created on first registration.
        handler : Any
            A function, lambda, callable object, class, ``(obj, "method")``
            or ``(Type, "method")`` pair, ``"pkg.mod.func"`` path or
            ``"pkg.mod.Type::method"`` string.

        Raises
        ------
        InvalidArgumentError
            If the hook name is blank or the handler has an invalid shape.
        """
        self._validate_hook(hook, handler)
        descriptor = describe(hook, handler)
        if self.eager_resolve:
            try:
                resolve(hook, descriptor)
            except NotInvocableError as e:
                raise InvalidArgumentError(str(e), hook=hook, handler=handler) from e

        with self._lock:
            if hook not in self._actions:
                self._actions[hook] = []
                self._actions = dict(sorted(self._actions.items()))
            self._actions[hook].append(descriptor)
        logger.debug(f"Registered {descriptor.label} under hook '{hook}'")

    def add_actions(self, hook: str, handlers: Iterable[Any]) -> None:
        """Register several handlers under one hook, in order.

        Registration stops at the first invalid handler; handlers added
        before it stay registered.

        Parameters
        ----------
        hook : str
            Non-blank hook name.
        handlers : Iterable[Any]
            Handlers to register. A tuple is a single ``(owner, method)``
            handler, not a sequence of handlers, and is rejected here, as
            is a mapping.
        """
        if isinstance(handlers, (str, tuple, Mapping)) or not isinstance(handlers, Iterable):
            raise InvalidArgumentError(
                f"Expected a list of handlers for hook {hook!r}, got {type(handlers).__name__}",
                hook=hook,
                handler=handlers,
            )
        with self._lock:
            for handler in handlers:
                self.add_action(hook, handler)

    def set_actions(self, actions: Mapping[str, Any]) -> None:
        """Replace the whole registry with the given hooks and handlers.

        Parameters
        ----------
        actions : Mapping[str, Any]
            Hook name to a list of handlers or a single handler.
        """
        with self._lock:
            self.init()
            for hook, handlers in actions.items():
                if not isinstance(handlers, list):
                    handlers = [handlers]
                self.add_actions(hook, handlers)
            logger.info(f"Registry reset with {len(self._actions)} hooks")

    def action(self, hook: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering the decorated function under ``hook``."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_action(hook, func)
            return func

        return decorator

    def apply(
        self,
        hook: str,
        args: Optional[Sequence[Any]] = None,
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Invoke every handler under a hook and return the last result.

        Each handler receives the same argument objects, so a mutable
        argument (e.g. a list) changed by one handler is seen by the next.

        Parameters
        ----------
        hook : str
            Hook to invoke.
        args : Sequence[Any], optional
            Positional arguments passed to every handler.
        kwargs : Mapping[str, Any], optional
            Keyword arguments passed to every handler.

        Returns
        -------
        Any
            Result of the last handler.

        Raises
        ------
        HookNotFoundError
            If no handlers are registered under ``hook``.
        NotInvocableError
            If a handler cannot be resolved. Later handlers are skipped and
            earlier ones are not undone.
        """
        with self._lock:
            if not isinstance(hook, str) or hook not in self._actions:
                raise HookNotFoundError(hook)
            descriptors = tuple(self._actions[hook])

        args = () if args is None else args
        kwargs = {} if kwargs is None else kwargs
        logger.debug(f"Applying hook '{hook}' ({len(descriptors)} handlers)")

        result = None
        for descriptor in descriptors:
            try:
                target = resolve(hook, descriptor)
            except NotInvocableError as e:
                logger.warning(f"Cannot invoke handler for hook '{hook}': {e}")
                raise
            result = target(*args, **kwargs)
        return result

    def count(self, hook: str) -> int:
        """Number of handlers under ``hook``, 0 if absent."""
        with self._lock:
            return len(self._actions.get(hook, ())) if isinstance(hook, str) else 0

    def exists(self, hook: str) -> bool:
        if not isinstance(hook, str):
            return False
        with self._lock:
            return hook in self._actions

    def get_callables(self, hook: str) -> list[Any]:
        """Handlers under ``hook`` as registered, or an empty list.

        The returned list is a copy; changing it does not affect the registry.
        """
        if not isinstance(hook, str):
            return []
        with self._lock:
            return [d.handler for d in self._actions.get(hook, ())]

    def get_descriptors(self, hook: str) -> tuple[CallableDescriptor, ...]:
        if not isinstance(hook, str):
            return ()
        with self._lock:
            return tuple(self._actions.get(hook, ()))

    def get_hooks(self) -> list[str]:
        """Registered hook names, sorted."""
        with self._lock:
            return list(self._actions)

    def remove(self, hook: str) -> None:
        """Remove a hook and all its handlers. No-op if absent."""
        if not isinstance(hook, str):
            return
        with self._lock:
            if self._actions.pop(hook, None) is not None:
                logger.debug(f"Removed hook '{hook}'")

    def init(self) -> None:
        """Clear all hooks and handlers."""
        with self._lock:
            self._actions = {}

    def close(self) -> None:
        """Release all registered handlers."""
        self.init()

    def to_string(self) -> str:
        """Render one line per handler, grouped by hook.

        Hook names are padded to the longest name::

            greet   : (fcn)  app.handlers.say_hello
            shutdown : (obj)  app.Cleaner->run
        """
        with self._lock:
            snapshot = [(hook, tuple(descriptors)) for hook, descriptors in self._actions.items()]

        width = max((len(hook) for hook, _ in snapshot), default=0)
        return "".join(
            f"{hook.ljust(width)} : {render(descriptor)}\n"
            for hook, descriptors in snapshot
            for descriptor in descriptors
        )

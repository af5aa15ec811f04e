"""Handler descriptor types and their classification."""

import builtins
import inspect
import keyword
from dataclasses import dataclass
from enum import Enum
from pkgutil import resolve_name
from typing import Any, Callable, Optional

from ..exceptions import InvalidArgumentError, NotInvocableError

# Label prefixes, padded to a common width
OBJECT_TAG = "(obj)  "
FUNCTION_TAG = "(fcn)  "
TYPE_TAG = "(fqcn) "
UNKNOWN_TAG = "(?)    "

TYPE_SEPARATOR = "::"
INSTANCE_SEPARATOR = "->"

_SCALAR_TYPES = (int, float, complex, bool, bytes, bytearray, type(None))


class HandlerKind(Enum):
    """Shape of a registered handler."""

    FUNCTION = "function"
    LAMBDA = "lambda"
    FUNCTION_PATH = "function_path"
    BOUND_METHOD = "bound_method"
    TYPE_METHOD = "type_method"
    INVOCABLE_OBJECT = "invocable_object"


@dataclass(frozen=True, eq=False)
class CallableDescriptor:
    """A registered handler together with its classified shape.

    Parameters
    ----------
    kind : HandlerKind
        Shape of the handler, fixed at registration.
    target : Any
        Function, instance, class or dotted path the handler points at.
    method : str, optional
        Method name for bound-pair handlers.
    handler : Any
        The handler exactly as it was registered.
    """

    kind: HandlerKind
    target: Any
    method: Optional[str] = None
    handler: Any = None

    @property
    def label(self) -> str:
        return render(self)


def _qualified_name(obj: Any) -> str:
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if name is None:
        return _dump(obj)
    module = getattr(obj, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name


def _dump(value: Any) -> str:
    return "".join(repr(value).split())


def _is_identifier(name: Any) -> bool:
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def _is_dotted_path(text: str) -> bool:
    """Check ``pkg.module.attr`` or ``pkg.module:attr.sub`` syntax only."""
    module, colon, attr = text.partition(":")
    if colon and not attr:
        return False
    parts = module.split(".") + (attr.split(".") if attr else [])
    return all(_is_identifier(part) for part in parts)


def render(descriptor: CallableDescriptor) -> str:
    """Render a human readable label for a registered handler."""
    kind = descriptor.kind
    if kind in (HandlerKind.FUNCTION, HandlerKind.LAMBDA):
        return FUNCTION_TAG + _qualified_name(descriptor.target)
    if kind is HandlerKind.FUNCTION_PATH:
        return FUNCTION_TAG + descriptor.target
    if kind is HandlerKind.INVOCABLE_OBJECT:
        return OBJECT_TAG + _qualified_name(type(descriptor.target))
    if kind is HandlerKind.BOUND_METHOD:
        owner = _qualified_name(type(descriptor.target))
        return f"{OBJECT_TAG}{owner}{INSTANCE_SEPARATOR}{descriptor.method}"

    target = descriptor.target
    owner = target if isinstance(target, str) else _qualified_name(target)
    if descriptor.method is None:
        return TYPE_TAG + owner
    return f"{TYPE_TAG}{owner}{TYPE_SEPARATOR}{descriptor.method}"


def render_value(value: Any) -> str:
    """Render an arbitrary, possibly malformed, handler value."""
    if isinstance(value, (tuple, list)) and value:
        first = value[0]
        separator = TYPE_SEPARATOR
        if isinstance(first, str):
            label = TYPE_TAG + first
        elif inspect.isclass(first):
            label = TYPE_TAG + _qualified_name(first)
        elif isinstance(first, _SCALAR_TYPES + (tuple, list, dict)):
            label = UNKNOWN_TAG + _dump(first)
        else:
            label = OBJECT_TAG + _qualified_name(type(first))
            separator = INSTANCE_SEPARATOR
        if len(value) > 1:
            label += f"{separator}{value[1]}"
        return label
    if isinstance(value, str):
        return TYPE_TAG + value
    if inspect.isfunction(value) or inspect.isbuiltin(value):
        return FUNCTION_TAG + _qualified_name(value)
    if callable(value) and not inspect.isclass(value):
        return OBJECT_TAG + _qualified_name(type(value))
    return UNKNOWN_TAG + _dump(value)


def _invalid(hook: str, handler: Any, reason: str) -> InvalidArgumentError:
    return InvalidArgumentError(
        f"Invalid {hook} : {render_value(handler)} ({reason})", hook=hook, handler=handler
    )


def _describe_pair(hook: str, pair: Any) -> CallableDescriptor:
    if len(pair) != 2:
        raise _invalid(hook, pair, f"expected (owner, method) pair, got {len(pair)} items")
    owner, method = pair
    if not _is_identifier(method):
        raise _invalid(hook, pair, "method name must be an identifier string")
    if isinstance(owner, str):
        if not _is_dotted_path(owner):
            raise _invalid(hook, pair, "type name must be a dotted path")
        return CallableDescriptor(HandlerKind.TYPE_METHOD, owner, method, pair)
    if inspect.isclass(owner):
        return CallableDescriptor(HandlerKind.TYPE_METHOD, owner, method, pair)
    if owner is None:
        raise _invalid(hook, pair, "owner must be an object or a type")
    return CallableDescriptor(HandlerKind.BOUND_METHOD, owner, method, pair)


def _describe_string(hook: str, text: str) -> CallableDescriptor:
    if TYPE_SEPARATOR in text:
        owner, _, method = text.partition(TYPE_SEPARATOR)
        if _is_dotted_path(owner) and _is_identifier(method):
            return CallableDescriptor(HandlerKind.TYPE_METHOD, owner, method, text)
        raise _invalid(hook, text, "expected 'package.module.Type::method'")
    if _is_dotted_path(text):
        return CallableDescriptor(HandlerKind.FUNCTION_PATH, text, None, text)
    raise _invalid(hook, text, "expected a dotted path to a function")


def describe(hook: str, handler: Any) -> CallableDescriptor:
    """Classify a handler by its shape without resolving it.

    Only the syntax of the handler is checked; whether a named function,
    type or method actually exists is left to invocation time.

    String handlers are either dotted paths (``"pkg.mod.func"``,
    ``"pkg.mod:func"``), imported when resolved, or bare names such as
    ``"len"`` or ``"dict::fromkeys"``, looked up in :mod:`builtins`.

    Raises
    ------
    InvalidArgumentError
        If the handler has no recognisable shape.
    """
    if isinstance(handler, (tuple, list)):
        return _describe_pair(hook, handler)
    if isinstance(handler, str):
        return _describe_string(hook, handler)
    if inspect.isclass(handler):
        return CallableDescriptor(HandlerKind.TYPE_METHOD, handler, None, handler)
    if inspect.ismethod(handler) or inspect.isbuiltin(handler):
        owner = getattr(handler, "__self__", None)
        if owner is None or inspect.ismodule(owner):
            return CallableDescriptor(HandlerKind.FUNCTION, handler, None, handler)
        kind = HandlerKind.TYPE_METHOD if inspect.isclass(owner) else HandlerKind.BOUND_METHOD
        return CallableDescriptor(kind, owner, handler.__name__, handler)
    if inspect.isfunction(handler):
        kind = HandlerKind.LAMBDA if handler.__name__ == "<lambda>" else HandlerKind.FUNCTION
        return CallableDescriptor(kind, handler, None, handler)
    if callable(handler):
        return CallableDescriptor(HandlerKind.INVOCABLE_OBJECT, handler, None, handler)
    raise _invalid(hook, handler, "not a callable")


def _import_path(path: str) -> Any:
    # Bare names refer to builtins, dotted paths are imported
    if "." not in path and ":" not in path:
        return getattr(builtins, path)
    return resolve_name(path)


def _lookup(descriptor: CallableDescriptor) -> Any:
    if callable(descriptor.handler):
        return descriptor.handler
    if descriptor.kind is HandlerKind.FUNCTION_PATH:
        return _import_path(descriptor.target)

    owner = descriptor.target
    if isinstance(owner, str):
        owner = _import_path(owner)
    if descriptor.method is None:
        return owner
    # getattr falls back to __getattr__ on the instance type or metaclass
    return getattr(owner, descriptor.method)


def resolve(hook: str, descriptor: CallableDescriptor) -> Callable[..., Any]:
    """Resolve a descriptor to the callable it refers to.

    Raises
    ------
    NotInvocableError
        If the target cannot be imported or looked up, or is not callable.
    """
    try:
        target = _lookup(descriptor)
    except (ImportError, AttributeError, ValueError) as e:
        raise NotInvocableError(hook, descriptor, render(descriptor), str(e)) from e
    if not callable(target):
        raise NotInvocableError(
            hook, descriptor, render(descriptor), f"{type(target).__name__} object is not callable"
        )
    return target

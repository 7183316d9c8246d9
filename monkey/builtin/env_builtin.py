"""Built-in functions for the Monkey runtime.

Builtins are consulted only after identifier lookup misses the whole
environment chain, so any binding with the same name shadows them. Each
builtin checks its own arity and argument types. Arrays are persistent:
`rest` and `push` return new arrays and never mutate their argument.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping

from monkey.errors import MonkeyArityError, MonkeyTypeError
from monkey.types.objects import (
    NULL,
    Array,
    Builtin,
    BuiltinFunction,
    Integer,
    MonkeyObject,
    String,
)

logger = logging.getLogger(__name__)

Builtins = Mapping[str, Builtin]


def unary(name: str) -> Callable[[Callable[[MonkeyObject], MonkeyObject]], BuiltinFunction]:
    """Wrap a one-argument builtin with the shared arity check."""
    def wrap(fn: Callable[[MonkeyObject], MonkeyObject]) -> BuiltinFunction:
        def builtin(args: list[MonkeyObject]) -> MonkeyObject:
            if len(args) != 1:
                raise MonkeyArityError(f"{name}() takes one arg, got {len(args)}")
            return fn(args[0])
        builtin.__name__ = fn.__name__
        builtin.__doc__ = fn.__doc__
        return builtin
    return wrap


def _require_array(name: str, arg: MonkeyObject) -> Array:
    if not isinstance(arg, Array):
        raise MonkeyTypeError(f"argument to {name}() not supported, got {arg.object_type.value}")
    return arg


# -------------------------------
# Sequences
# -------------------------------
@unary("len")
def len_builtin(arg: MonkeyObject) -> MonkeyObject:
    """Character count of a string or element count of an array."""
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    raise MonkeyTypeError(f"argument to len() not supported, got {arg.object_type.value}")


@unary("first")
def first(arg: MonkeyObject) -> MonkeyObject:
    """First element of an array; null when empty."""
    elements = _require_array("first", arg).elements
    return elements[0] if elements else NULL


@unary("last")
def last(arg: MonkeyObject) -> MonkeyObject:
    """Last element of an array; null when empty."""
    elements = _require_array("last", arg).elements
    return elements[-1] if elements else NULL


@unary("rest")
def rest(arg: MonkeyObject) -> MonkeyObject:
    """New array of all but the first element; null when empty."""
    elements = _require_array("rest", arg).elements
    if not elements:
        return NULL
    return Array(elements[1:])


def push(args: list[MonkeyObject]) -> MonkeyObject:
    """New array with one element appended."""
    if len(args) != 2:
        raise MonkeyArityError(f"push() takes two args, got {len(args)}")
    arr, elem = args
    if not isinstance(arr, Array):
        raise MonkeyTypeError(f"first argument to push() not supported, got {arr.object_type.value}")
    return Array(arr.elements + (elem,))


# -------------------------------
# Registration
# -------------------------------
BUILTIN_FUNCTIONS: dict[str, BuiltinFunction] = {
    "len": len_builtin,
    "first": first,
    "last": last,
    "rest": rest,
    "push": push,
}


@lru_cache(maxsize=None)
def default_builtins() -> Builtins:
    """The builtin table, constructed once and shared read-only."""
    table = {name: Builtin(name, fn) for name, fn in BUILTIN_FUNCTIONS.items()}
    logger.debug("Built builtin table: %s", ", ".join(table))
    return MappingProxyType(table)

"""Runtime values produced by the Monkey evaluator.

Every value carries an `object_type` tag (used in error messages) and an
`inspect()` rendering. `NULL`, `TRUE` and `FALSE` are singletons: the
language's `==` on anything but two integers is identity, so booleans and
null compare by `is`.

Python-level `==` on Integer/String/Array/Quote compares contents. That is
a host convenience only; the evaluator never uses it for the language's
`==` operator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, NamedTuple, Optional

from monkey import ast

if TYPE_CHECKING:
    from monkey.types.environment import Environment


class ObjectType(str, Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    ARRAY = "ARRAY"
    HASH = "HASH"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    QUOTE = "QUOTE"

    def __str__(self) -> str:
        return self.value


class HashKey(NamedTuple):
    object_type: ObjectType
    value: object


class MonkeyObject:
    __slots__ = ()
    object_type: ClassVar[ObjectType]

    def inspect(self) -> str:
        raise NotImplementedError

    def hash_key(self) -> Optional[HashKey]:
        """Key used by Hash values, or None if this value cannot be a key."""
        return None


# -------------------------------
# Scalars
# -------------------------------
@dataclass(frozen=True)
class Integer(MonkeyObject):
    object_type: ClassVar[ObjectType] = ObjectType.INTEGER
    value: int

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, self.value)


class Boolean(MonkeyObject):
    __slots__ = ("value",)
    object_type: ClassVar[ObjectType] = ObjectType.BOOLEAN

    def __init__(self, value: bool):
        self.value = value

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, self.value)

    def __repr__(self):
        return f"Boolean({self.value})"


class Null(MonkeyObject):
    __slots__ = ()
    object_type: ClassVar[ObjectType] = ObjectType.NULL

    def inspect(self) -> str:
        return "null"

    def __repr__(self):
        return "NULL"


@dataclass(frozen=True)
class String(MonkeyObject):
    object_type: ClassVar[ObjectType] = ObjectType.STRING
    value: str

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.object_type, self.value)


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(obj: MonkeyObject) -> bool:
    """Only `false` and `null` are falsy."""
    return obj is not FALSE and obj is not NULL


# -------------------------------
# Collections
# -------------------------------
@dataclass(frozen=True)
class Array(MonkeyObject):
    """Persistent array: builtins return new arrays instead of mutating."""

    object_type: ClassVar[ObjectType] = ObjectType.ARRAY
    elements: tuple[MonkeyObject, ...] = ()

    def inspect(self) -> str:
        return f"[{', '.join(e.inspect() for e in self.elements)}]"


class HashPair(NamedTuple):
    key: MonkeyObject
    value: MonkeyObject


@dataclass(eq=False)
class Hash(MonkeyObject):
    object_type: ClassVar[ObjectType] = ObjectType.HASH
    pairs: dict[HashKey, HashPair] = field(default_factory=dict)

    def inspect(self) -> str:
        items = ", ".join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return f"{{{items}}}"


# -------------------------------
# Control flow and callables
# -------------------------------
@dataclass(frozen=True)
class ReturnValue(MonkeyObject):
    """Wraps the value of a `return` until the enclosing call or program unwraps it."""

    object_type: ClassVar[ObjectType] = ObjectType.RETURN_VALUE
    value: MonkeyObject

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(eq=False)
class Function(MonkeyObject):
    """A closure: parameters, body, and the shared environment it was defined in."""

    object_type: ClassVar[ObjectType] = ObjectType.FUNCTION
    parameters: list[ast.Identifier]
    body: ast.BlockStatement
    env: Environment

    def inspect(self) -> str:
        return f"fn({', '.join(str(p) for p in self.parameters)}) {self.body}"

    def __repr__(self) -> str:
        return f"Function({self.inspect()})"


BuiltinFunction = Callable[[list[MonkeyObject]], MonkeyObject]


@dataclass(eq=False)
class Builtin(MonkeyObject):
    object_type: ClassVar[ObjectType] = ObjectType.BUILTIN
    name: str
    fn: BuiltinFunction

    def inspect(self) -> str:
        return f"builtin function {self.name}"


@dataclass
class Quote(MonkeyObject):
    """An unevaluated AST node, produced by `quote(...)`."""

    object_type: ClassVar[ObjectType] = ObjectType.QUOTE
    node: ast.Node

    def inspect(self) -> str:
        return f"QUOTE({self.node})"

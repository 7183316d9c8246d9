"""Generic post-order AST rewrite.

`modify(node, modifier)` replaces every child of `node` with the rewritten
child, then returns `modifier(node)`. Which attributes hold children is
declared once in CHILD_SLOTS, so a new node type only needs a new entry
there. Replacements are type-checked against the slot: a statement must stay
a statement, an expression an expression, and so on.

Nodes are rewritten in place; callers that must keep the original tree
(e.g. quote) pass a copy.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from monkey import ast
from monkey.errors import MonkeyEvalError

ModifierFn = Callable[[ast.Node], ast.Node]


class SlotKind(Enum):
    ONE = "one"
    OPTIONAL = "optional"
    MANY = "many"
    PAIRS = "pairs"


class Slot(NamedTuple):
    attr: str
    kind: SlotKind
    expected: type


_STATEMENTS = Slot("statements", SlotKind.MANY, ast.Statement)

CHILD_SLOTS: dict[type, tuple[Slot, ...]] = {
    ast.Program: (_STATEMENTS,),
    ast.BlockStatement: (_STATEMENTS,),
    ast.LetStatement: (Slot("value", SlotKind.ONE, ast.Expression),),
    ast.ReturnStatement: (Slot("return_value", SlotKind.ONE, ast.Expression),),
    ast.ExpressionStatement: (Slot("expression", SlotKind.ONE, ast.Expression),),
    ast.PrefixExpression: (Slot("right", SlotKind.ONE, ast.Expression),),
    ast.InfixExpression: (
        Slot("left", SlotKind.ONE, ast.Expression),
        Slot("right", SlotKind.ONE, ast.Expression),
    ),
    ast.IndexExpression: (
        Slot("left", SlotKind.ONE, ast.Expression),
        Slot("index", SlotKind.ONE, ast.Expression),
    ),
    ast.IfExpression: (
        Slot("condition", SlotKind.ONE, ast.Expression),
        Slot("consequence", SlotKind.ONE, ast.BlockStatement),
        Slot("alternative", SlotKind.OPTIONAL, ast.BlockStatement),
    ),
    ast.FunctionLiteral: (
        Slot("parameters", SlotKind.MANY, ast.Identifier),
        Slot("body", SlotKind.ONE, ast.BlockStatement),
    ),
    ast.CallExpression: (
        Slot("function", SlotKind.ONE, ast.Expression),
        Slot("arguments", SlotKind.MANY, ast.Expression),
    ),
    ast.ArrayLiteral: (Slot("elements", SlotKind.MANY, ast.Expression),),
    ast.HashLiteral: (Slot("pairs", SlotKind.PAIRS, ast.Expression),),
}

_KIND_NAMES: dict[type, str] = {
    ast.Statement: "statement",
    ast.Expression: "expression",
    ast.BlockStatement: "block statement",
    ast.Identifier: "identifier",
}


def _checked(node: ast.Node, expected: type) -> ast.Node:
    if not isinstance(node, expected):
        name = _KIND_NAMES[expected]
        raise MonkeyEvalError(f"modifier made {name} into non-{name}: {type(node).__name__}")
    return node


def _modify_child(node: ast.Node, modifier: ModifierFn, expected: type) -> ast.Node:
    return _checked(modify(node, modifier), expected)


def modify(node: ast.Node, modifier: ModifierFn) -> ast.Node:
    for slot in CHILD_SLOTS.get(type(node), ()):
        value = getattr(node, slot.attr)
        match slot.kind:
            case SlotKind.ONE:
                new = _modify_child(value, modifier, slot.expected)
            case SlotKind.OPTIONAL:
                new = None if value is None else _modify_child(value, modifier, slot.expected)
            case SlotKind.MANY:
                new = [_modify_child(v, modifier, slot.expected) for v in value]
            case SlotKind.PAIRS:
                new = [
                    (
                        _modify_child(k, modifier, slot.expected),
                        _modify_child(v, modifier, slot.expected),
                    )
                    for k, v in value
                ]
        setattr(node, slot.attr, new)
    return modifier(node)

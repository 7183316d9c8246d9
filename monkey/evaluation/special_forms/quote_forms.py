"""quote/unquote: code as data.

`quote(expr)` yields the AST of `expr` as a Quote value instead of evaluating
it. Inside it, every `unquote(x)` call is replaced by the AST form of `x`'s
value, evaluated in the quoting environment. The rewrite works on a copy, so
a quote inside a function body gives fresh results on every call.
"""

from __future__ import annotations

import copy
from typing import Callable, Optional

from monkey import ast
from monkey.builtin.env_builtin import Builtins, default_builtins
from monkey.errors import MonkeyArityError, MonkeyTypeError
from monkey.evaluation.modify import modify
from monkey.types.environment import Environment
from monkey.types.objects import Boolean, Integer, MonkeyObject, Quote

EvaluatorFn = Callable[[ast.Node, Environment, Builtins], MonkeyObject]


def quote(
    node: ast.Node,
    env: Environment,
    builtins: Optional[Builtins] = None,
    evaluate_fn: Optional[EvaluatorFn] = None,
) -> Quote:
    """Quote `node`, splicing in the values of its unquote(...) calls."""
    if builtins is None:
        builtins = default_builtins()
    if evaluate_fn is None:
        # Lazy import to avoid circular imports
        from monkey.evaluation.evaluator import evaluate0
        evaluate_fn = evaluate0
    return Quote(eval_unquote_calls(copy.deepcopy(node), env, builtins, evaluate_fn))


def eval_unquote_calls(
    node: ast.Node, env: Environment, builtins: Builtins, evaluate_fn: EvaluatorFn
) -> ast.Node:
    def modifier(n: ast.Node) -> ast.Node:
        if not is_unquote_call(n) or len(n.arguments) != 1:
            return n
        return object_to_ast(evaluate_fn(n.arguments[0], env, builtins))

    return modify(node, modifier)


def is_unquote_call(node: ast.Node) -> bool:
    return isinstance(node, ast.CallExpression) and str(node.function) == "unquote"


def object_to_ast(obj: MonkeyObject) -> ast.Node:
    match obj:
        case Integer(value=value):
            return ast.IntegerLiteral(value)
        case Boolean():
            return ast.BooleanLiteral(obj.value)
        case Quote(node=node):
            return node
    raise MonkeyTypeError(f"cannot convert {obj.object_type.value} to an AST node")


def quote_form(
    args: list[ast.Expression], env: Environment, builtins: Builtins, evaluate_fn: EvaluatorFn
) -> MonkeyObject:
    if len(args) != 1:
        raise MonkeyArityError(f"quote() takes one arg, got {len(args)}")
    return quote(args[0], env, builtins, evaluate_fn)

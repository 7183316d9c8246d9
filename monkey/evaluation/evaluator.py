"""Tree-walking evaluator for Monkey.

`evaluate` is the public entry point; `evaluate0` is the recursive worker
that special forms (currently only `quote`) call back into. Every semantic
violation raises a MonkeyEvalError subclass that propagates unchanged to
the caller of `evaluate`.

`return` is modelled as a ReturnValue wrapper rather than an exception:
blocks, operators, calls and literals hand it upward untouched, and the
enclosing function call (or the program) unwraps it.
"""

from __future__ import annotations

from typing import Optional, Union

from monkey import ast
from monkey.builtin.env_builtin import Builtins, default_builtins
from monkey.errors import (
    MonkeyArityError,
    MonkeyEvalError,
    MonkeyNameError,
    MonkeyRecursionError,
    MonkeyTypeError,
)
from monkey.evaluation.special_forms import SPECIAL_FORMS
from monkey.types.environment import Environment
from monkey.types.objects import (
    FALSE,
    NULL,
    TRUE,
    Array,
    Builtin,
    Function,
    Hash,
    HashPair,
    Integer,
    MonkeyObject,
    ReturnValue,
    String,
    is_truthy,
    native_bool_to_boolean,
)


def evaluate(
    node: ast.Node, env: Environment, builtins: Optional[Builtins] = None
) -> MonkeyObject:
    """
    Evaluate `node` in `env`. Deep recursion in the evaluated program
    surfaces as MonkeyRecursionError.
    """
    if builtins is None:
        builtins = default_builtins()
    try:
        return evaluate0(node, env, builtins)
    except RecursionError:
        raise MonkeyRecursionError("maximum recursion depth exceeded") from None


def evaluate0(node: ast.Node, env: Environment, builtins: Builtins) -> MonkeyObject:
    """Core evaluator: one exhaustive dispatch over the node type."""
    match node:
        # --- Statements ---
        case ast.Program(statements=statements):
            return eval_program(statements, env, builtins)
        case ast.BlockStatement(statements=statements):
            return eval_block(statements, env, builtins)
        case ast.ExpressionStatement(expression=expr):
            return evaluate0(expr, env, builtins)
        case ast.LetStatement(name=name, value=value_node):
            value = evaluate0(value_node, env, builtins)
            if isinstance(value, ReturnValue):
                return value
            return env.define(name.value, value)
        case ast.ReturnStatement(return_value=value_node):
            value = evaluate0(value_node, env, builtins)
            if isinstance(value, ReturnValue):
                return value
            return ReturnValue(value)

        # --- Literals ---
        case ast.IntegerLiteral(value=value):
            return Integer(value)
        case ast.BooleanLiteral(value=value):
            return native_bool_to_boolean(value)
        case ast.StringLiteral(value=value):
            return String(value)
        case ast.ArrayLiteral(elements=elements):
            values = eval_expressions(elements, env, builtins)
            if isinstance(values, ReturnValue):
                return values
            return Array(tuple(values))
        case ast.HashLiteral(pairs=pairs):
            return eval_hash_literal(pairs, env, builtins)
        case ast.FunctionLiteral(parameters=parameters, body=body):
            # Captures the defining environment by reference
            return Function(parameters, body, env)

        # --- Operators ---
        # A ReturnValue produced inside an operand unwinds past the operator
        case ast.PrefixExpression(operator=op, right=right):
            rhs = evaluate0(right, env, builtins)
            if isinstance(rhs, ReturnValue):
                return rhs
            return eval_prefix_expression(op, rhs)
        case ast.InfixExpression(left=left, operator=op, right=right):
            lhs = evaluate0(left, env, builtins)
            if isinstance(lhs, ReturnValue):
                return lhs
            rhs = evaluate0(right, env, builtins)
            if isinstance(rhs, ReturnValue):
                return rhs
            return eval_infix_expression(op, lhs, rhs)
        case ast.IfExpression(condition=cond, consequence=consequence, alternative=alternative):
            test = evaluate0(cond, env, builtins)
            if isinstance(test, ReturnValue):
                return test
            if is_truthy(test):
                return evaluate0(consequence, env, builtins)
            if alternative is not None:
                return evaluate0(alternative, env, builtins)
            return NULL
        case ast.Identifier(value=name):
            return eval_identifier(name, env, builtins)
        case ast.CallExpression(function=fn_node, arguments=arg_nodes):
            if isinstance(fn_node, ast.Identifier) and fn_node.value in SPECIAL_FORMS:
                return SPECIAL_FORMS[fn_node.value](arg_nodes, env, builtins, evaluate0)
            fn = evaluate0(fn_node, env, builtins)
            if isinstance(fn, ReturnValue):
                return fn
            args = eval_expressions(arg_nodes, env, builtins)
            if isinstance(args, ReturnValue):
                return args
            return apply_function(fn, args, builtins)
        case ast.IndexExpression(left=left, index=index):
            values = eval_expressions([left, index], env, builtins)
            if isinstance(values, ReturnValue):
                return values
            return eval_index_expression(*values)

    raise MonkeyEvalError(f"cannot evaluate node: {type(node).__name__}")


# -------------------------------
# Statement sequences
# -------------------------------
def eval_program(statements: list[ast.Statement], env: Environment, builtins: Builtins) -> MonkeyObject:
    result: MonkeyObject = NULL
    for stmt in statements:
        result = evaluate0(stmt, env, builtins)
        if isinstance(result, ReturnValue):
            return result.value
    return result


def eval_block(statements: list[ast.Statement], env: Environment, builtins: Builtins) -> MonkeyObject:
    result: MonkeyObject = NULL
    for stmt in statements:
        result = evaluate0(stmt, env, builtins)
        if isinstance(result, ReturnValue):
            # still wrapped: the enclosing call or program unwraps it
            return result
    return result


def eval_expressions(
    nodes: list[ast.Expression], env: Environment, builtins: Builtins
) -> Union[list[MonkeyObject], ReturnValue]:
    """Values of `nodes` left to right, or the first ReturnValue met on the way."""
    values: list[MonkeyObject] = []
    for n in nodes:
        value = evaluate0(n, env, builtins)
        if isinstance(value, ReturnValue):
            return value
        values.append(value)
    return values


# -------------------------------
# Names and calls
# -------------------------------
def eval_identifier(name: str, env: Environment, builtins: Builtins) -> MonkeyObject:
    value = env.get(name)
    if value is None:
        value = builtins.get(name)
    if value is None:
        raise MonkeyNameError(f"undefined name {name}")
    return value


def apply_function(fn: MonkeyObject, args: list[MonkeyObject], builtins: Builtins) -> MonkeyObject:
    if isinstance(fn, Function):
        call_env = extend_function_env(fn, args)
        result = evaluate0(fn.body, call_env, builtins)
        if isinstance(result, ReturnValue):
            return result.value
        return result
    if isinstance(fn, Builtin):
        return fn.fn(args)
    raise MonkeyTypeError(f"calling non-callable value: type {fn.object_type.value}")


def extend_function_env(fn: Function, args: list[MonkeyObject]) -> Environment:
    """New frame enclosed by the function's captured env, with parameters bound positionally."""
    if len(args) != len(fn.parameters):
        raise MonkeyArityError(
            f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
        )
    env = fn.env.enclosed()
    for param, arg in zip(fn.parameters, args):
        env.define(param.value, arg)
    return env


# -------------------------------
# Operators
# -------------------------------
def eval_prefix_expression(operator: str, right: MonkeyObject) -> MonkeyObject:
    match operator:
        case "!":
            return FALSE if is_truthy(right) else TRUE
        case "-" if isinstance(right, Integer):
            return Integer(-right.value)
    raise MonkeyTypeError(f"unknown operator: {operator}{right.object_type.value}")


def _int_div(left: int, right: int) -> int:
    # truncates toward zero
    q = abs(left) // abs(right)
    return q if (left < 0) == (right < 0) else -q


def eval_integer_infix_expression(operator: str, left: int, right: int) -> Optional[MonkeyObject]:
    match operator:
        case "+":
            return Integer(left + right)
        case "-":
            return Integer(left - right)
        case "*":
            return Integer(left * right)
        case "/":
            if right == 0:
                raise MonkeyEvalError(f"division by zero: {left} / {right}")
            return Integer(_int_div(left, right))
        case "<":
            return native_bool_to_boolean(left < right)
        case ">":
            return native_bool_to_boolean(left > right)
        case "==":
            return native_bool_to_boolean(left == right)
        case "!=":
            return native_bool_to_boolean(left != right)
    return None


def eval_infix_expression(operator: str, left: MonkeyObject, right: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Integer) and isinstance(right, Integer):
        result = eval_integer_infix_expression(operator, left.value, right.value)
        if result is not None:
            return result
    elif operator == "+" and isinstance(left, String) and isinstance(right, String):
        return String(left.value + right.value)
    elif operator == "==":
        return native_bool_to_boolean(left is right)
    elif operator == "!=":
        return native_bool_to_boolean(left is not right)
    raise MonkeyTypeError(
        f"invalid operation: {left.object_type.value} {operator} {right.object_type.value}"
    )


# -------------------------------
# Collections
# -------------------------------
def eval_hash_literal(
    pairs: list[tuple[ast.Expression, ast.Expression]], env: Environment, builtins: Builtins
) -> Union[Hash, ReturnValue]:
    result = Hash()
    for key_node, value_node in pairs:
        key = evaluate0(key_node, env, builtins)
        if isinstance(key, ReturnValue):
            return key
        hash_key = key.hash_key()
        if hash_key is None:
            raise MonkeyTypeError(f"unusable as hash key: {key.object_type.value}")
        value = evaluate0(value_node, env, builtins)
        if isinstance(value, ReturnValue):
            return value
        result.pairs[hash_key] = HashPair(key, value)
    return result


def eval_index_expression(left: MonkeyObject, index: MonkeyObject) -> MonkeyObject:
    if isinstance(left, Array) and isinstance(index, Integer):
        i = index.value
        if i < 0 or i >= len(left.elements):
            return NULL
        return left.elements[i]
    if isinstance(left, Hash):
        hash_key = index.hash_key()
        if hash_key is None:
            raise MonkeyTypeError(f"unusable as hash key: {index.object_type.value}")
        pair = left.pairs.get(hash_key)
        return pair.value if pair is not None else NULL
    raise MonkeyTypeError(
        f"index operator not supported: {left.object_type.value}[{index.object_type.value}]"
    )

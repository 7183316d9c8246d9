"""Abstract syntax tree for Monkey programs.

Statements and expressions are two disjoint families rooted at `Statement`
and `Expression`. Every node prints (via `str`) in a canonical form that the
parser reads back to the same tree, e.g. ``a + b * c`` prints as
``(a + (b * c))``.

Nodes are plain dataclasses: the parser builds them, the evaluator only
reads them, and the quote pass (`monkey.evaluation.modify`) rewrites their
child slots in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


class Node:
    __slots__ = ()

    def token_literal(self) -> str:
        raise NotImplementedError


class Statement(Node):
    __slots__ = ()


class Expression(Node):
    __slots__ = ()


def _join_statements(statements: list[Statement]) -> str:
    return "; ".join(str(s) for s in statements)


# -------------------------------
# Program and statements
# -------------------------------
@dataclass
class Program(Node):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self) -> str:
        return _join_statements(self.statements)


@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def token_literal(self) -> str:
        return "let"

    def __str__(self) -> str:
        return f"let {self.name} = {self.value}"


@dataclass
class ReturnStatement(Statement):
    return_value: Expression

    def token_literal(self) -> str:
        return "return"

    def __str__(self) -> str:
        return f"return {self.return_value}"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def token_literal(self) -> str:
        return self.expression.token_literal()

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return "{"

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return f"{{ {_join_statements(self.statements)} }}"


# -------------------------------
# Atoms
# -------------------------------
@dataclass
class Identifier(Expression):
    value: str

    def token_literal(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int

    def token_literal(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def token_literal(self) -> str:
        return "true" if self.value else "false"

    def __str__(self) -> str:
        return self.token_literal()


@dataclass
class StringLiteral(Expression):
    value: str

    def token_literal(self) -> str:
        return self.value

    def __str__(self) -> str:
        return f'"{self.value}"'


# -------------------------------
# Composite expressions
# -------------------------------
@dataclass
class ArrayLiteral(Expression):
    elements: list[Expression] = field(default_factory=list)

    def token_literal(self) -> str:
        return "["

    def __str__(self) -> str:
        return f"[{', '.join(str(e) for e in self.elements)}]"


@dataclass
class HashLiteral(Expression):
    pairs: list[tuple[Expression, Expression]] = field(default_factory=list)

    def token_literal(self) -> str:
        return "{"

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.pairs) + "}"


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def token_literal(self) -> str:
        return self.operator

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def token_literal(self) -> str:
        return self.operator

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def token_literal(self) -> str:
        return "if"

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: list[Identifier]
    body: BlockStatement

    def token_literal(self) -> str:
        return "fn"

    def __str__(self) -> str:
        return f"fn({', '.join(str(p) for p in self.parameters)}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral, or any callable-producing expression
    arguments: list[Expression] = field(default_factory=list)

    def token_literal(self) -> str:
        return "("

    def __str__(self) -> str:
        return f"{self.function}({', '.join(str(a) for a in self.arguments)})"


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def token_literal(self) -> str:
        return "["

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


AnyNode = Union[Program, Statement, Expression]


def is_statement(node: Node) -> bool:
    return isinstance(node, Statement)


def is_expression(node: Node) -> bool:
    return isinstance(node, Expression)

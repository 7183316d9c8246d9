"""
  Monkey Parser

- Pratt (precedence-climbing) parser over a Lexer with two tokens of lookahead
- Each token type carries at most one prefix rule and one infix rule
- Syntax errors never raise inside the parser: a diagnostic is appended to
  `Parser.errors` and the malformed sub-tree comes back as None, so it is
  never inserted into the tree
- `parse(source)` is the strict entry point: it raises MonkeySyntaxError when
  any diagnostic was recorded
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Optional

from monkey import ast
from monkey.errors import MonkeySyntaxError
from monkey.reader.lexer import Lexer
from monkey.reader.token import Token, TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==, !=
    LESSGREATER = 3  # <, >
    SUM = 4  # +, -
    PRODUCT = 5  # *, /
    PREFIX = 6  # -x, !x
    CALL = 7  # f(x)
    INDEX = 8  # a[i]


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

PrefixParseFn = Callable[[], Optional[ast.Expression]]
InfixParseFn = Callable[[ast.Expression], Optional[ast.Expression]]


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: list[str] = []

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
            TokenType.LBRACKET: self.parse_array_literal,
            TokenType.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            t: self.parse_infix_expression
            for t in (
                TokenType.PLUS,
                TokenType.MINUS,
                TokenType.ASTERISK,
                TokenType.SLASH,
                TokenType.LT,
                TokenType.GT,
                TokenType.EQ,
                TokenType.NOT_EQ,
            )
        }
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression
        self.infix_parse_fns[TokenType.LBRACKET] = self.parse_index_expression

        # prime cur_token and peek_token
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # -------------------------------
    # Token cursor
    # -------------------------------
    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.token_type is token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.token_type is token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has `token_type`; otherwise record a diagnostic."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.token_type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.token_type, Precedence.LOWEST)

    # -------------------------------
    # Diagnostics
    # -------------------------------
    def peek_error(self, token_type: TokenType) -> None:
        self.errors.append(
            f"expected next token to be {token_type.value}, "
            f"got {self.peek_token.token_type.value} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: TokenType) -> None:
        self.errors.append(f"no prefix parse function for {token_type.value} found")

    # -------------------------------
    # Statements
    # -------------------------------
    def parse_program(self) -> ast.Program:
        program = ast.Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[ast.Statement]:
        match self.cur_token.token_type:
            case TokenType.LET:
                return self.parse_let_statement()
            case TokenType.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def _skip_optional_semicolon(self) -> None:
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

    def parse_let_statement(self) -> Optional[ast.LetStatement]:
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = ast.Identifier(self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_optional_semicolon()
        return ast.LetStatement(name, value)

    def parse_return_statement(self) -> Optional[ast.ReturnStatement]:
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_optional_semicolon()
        return ast.ReturnStatement(value)

    def parse_expression_statement(self) -> Optional[ast.ExpressionStatement]:
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None

        self._skip_optional_semicolon()
        return ast.ExpressionStatement(expr)

    def parse_block_statement(self) -> ast.BlockStatement:
        """Statements up to the closing brace (or end of input). cur_token is '{' on entry."""
        block = ast.BlockStatement()
        self.next_token()
        while not (self.cur_token_is(TokenType.RBRACE) or self.cur_token_is(TokenType.EOF)):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        return block

    # -------------------------------
    # Expressions
    # -------------------------------
    def parse_expression(self, precedence: Precedence) -> Optional[ast.Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.token_type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.token_type)
            return None
        left = prefix()

        while (
            left is not None
            and not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fns.get(self.peek_token.token_type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> ast.Identifier:
        return ast.Identifier(self.cur_token.literal)

    def parse_integer_literal(self) -> ast.IntegerLiteral:
        # the lexer only emits ASCII digit runs for INT
        return ast.IntegerLiteral(int(self.cur_token.literal, 10))

    def parse_string_literal(self) -> ast.StringLiteral:
        return ast.StringLiteral(self.cur_token.literal)

    def parse_boolean(self) -> ast.BooleanLiteral:
        return ast.BooleanLiteral(self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Optional[ast.PrefixExpression]:
        operator = self.cur_token.literal
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return ast.PrefixExpression(operator, right)

    def parse_infix_expression(self, left: ast.Expression) -> Optional[ast.InfixExpression]:
        operator = self.cur_token.literal
        # Same-level cutoff for the right operand gives left associativity
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return ast.InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Optional[ast.Expression]:
        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expr

    def parse_if_expression(self) -> Optional[ast.IfExpression]:
        if not self.expect_peek(TokenType.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        if not self.peek_token_is(TokenType.ELSE):
            return ast.IfExpression(condition, consequence)

        self.next_token()
        if not self.expect_peek(TokenType.LBRACE):
            return None
        alternative = self.parse_block_statement()
        return ast.IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[ast.FunctionLiteral]:
        if not self.expect_peek(TokenType.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return ast.FunctionLiteral(parameters, body)

    def parse_function_parameters(self) -> Optional[list[ast.Identifier]]:
        identifiers: list[ast.Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(self.parse_identifier())

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(self.parse_identifier())

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_expression_list(self, end: TokenType) -> Optional[list[ast.Expression]]:
        """Comma-separated expressions up to `end`; cur_token is the opening delimiter."""
        items: list[ast.Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items

        self.next_token()
        expr = self.parse_expression(Precedence.LOWEST)
        if expr is None:
            return None
        items.append(expr)

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            expr = self.parse_expression(Precedence.LOWEST)
            if expr is None:
                return None
            items.append(expr)

        if not self.expect_peek(end):
            return None
        return items

    def parse_call_expression(self, function: ast.Expression) -> Optional[ast.CallExpression]:
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return ast.CallExpression(function, arguments)

    def parse_index_expression(self, left: ast.Expression) -> Optional[ast.IndexExpression]:
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self.expect_peek(TokenType.RBRACKET):
            return None
        return ast.IndexExpression(left, index)

    def parse_array_literal(self) -> Optional[ast.ArrayLiteral]:
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ast.ArrayLiteral(elements)

    def parse_hash_literal(self) -> Optional[ast.HashLiteral]:
        pairs: list[tuple[ast.Expression, ast.Expression]] = []
        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self.expect_peek(TokenType.COLON):
                return None

            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))

            if not self.peek_token_is(TokenType.RBRACE) and not self.expect_peek(TokenType.COMMA):
                return None

        if not self.expect_peek(TokenType.RBRACE):
            return None
        return ast.HashLiteral(pairs)


def parse(source: str) -> ast.Program:
    """Parse `source`, raising MonkeySyntaxError if the parser recorded diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise MonkeySyntaxError(parser.errors)
    return program

# Public surface of the Monkey interpreter.
#
# Pipeline: source -> Lexer -> Parser -> ast.Program -> evaluate(program, env) -> MonkeyObject
#
# Naming guidance:
# - `parse` is strict (raises MonkeySyntaxError); use Parser directly to inspect
#   diagnostics without raising.
# - Runtime values live in monkey.types.objects; AST nodes in monkey.ast.

import logging

from monkey.errors import (
    MonkeyError,
    MonkeySyntaxError,
    MonkeyEvalError,
    MonkeyTypeError,
    MonkeyArityError,
    MonkeyNameError,
    MonkeyRecursionError,
)
from monkey.reader.lexer import Lexer, lex
from monkey.reader.parser import Parser, parse
from monkey.types.environment import Environment
from monkey.evaluation.evaluator import evaluate
from monkey.evaluation.special_forms.quote_forms import quote
from monkey.evaluation.modify import modify
from monkey.interpreter import Interpreter

logging.getLogger(__name__).addHandler(logging.NullHandler())

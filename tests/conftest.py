import pytest

from monkey.evaluation.evaluator import evaluate
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser
from monkey.types.environment import Environment


def parse_clean(source):
    """Parse `source` and fail the test if the parser recorded diagnostics."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    assert parser.errors == [], f"parser errors for {source!r}: {parser.errors}"
    return program


@pytest.fixture
def env():
    """Return a fresh top-level environment for each test."""
    return Environment()


@pytest.fixture
def run(env):
    """Evaluate Monkey source in the test's environment."""
    def _run(source):
        return evaluate(parse_clean(source), env)
    return _run

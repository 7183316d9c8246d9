import pytest

from monkey import ast
from monkey.errors import MonkeyArityError, MonkeyNameError, MonkeyTypeError
from monkey.evaluation.special_forms.quote_forms import object_to_ast, quote
from monkey.types.environment import Environment
from monkey.types.objects import FALSE, TRUE, Integer, Quote, String


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(5)", "5"),
        ("quote(5 + 8)", "(5 + 8)"),
        ("quote(foobar)", "foobar"),
        ("quote(foobar + barfoo)", "(foobar + barfoo)"),
        ('quote("text")', '"text"'),
    ],
)
def test_quote(run, source, expected):
    result = run(source)
    assert isinstance(result, Quote)
    assert str(result.node) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(unquote(4))", "4"),
        ("quote(unquote(4 + 4))", "8"),
        ("quote(8 + unquote(4 + 4))", "(8 + 8)"),
        ("quote(unquote(4 + 4) + 8)", "(8 + 8)"),
        ("let foobar = 8; quote(foobar)", "foobar"),
        ("let foobar = 8; quote(unquote(foobar))", "8"),
        ("quote(unquote(true))", "true"),
        ("quote(unquote(true == false))", "false"),
        ("quote(unquote(quote(4 + 4)))", "(4 + 4)"),
        (
            "let quotedInfixExpression = quote(4 + 4); "
            "quote(unquote(4 + 4) + unquote(quotedInfixExpression))",
            "(8 + (4 + 4))",
        ),
        ("quote(-unquote(2 * 3))", "(-6)"),
        ("quote([unquote(1 + 1), 3][unquote(0 + 0)])", "([2, 3][0])"),
        ("quote(if (unquote(1 < 2)) { unquote(5) } else { 6 })", "if (true) { 5 } else { 6 }"),
        ("quote(fn(x) { x + unquote(10 / 2) })", "fn(x) { (x + 5) }"),
        ("quote({unquote(1): unquote(2)})", "{1: 2}"),
        ("quote(f(unquote(1 + 2)))", "f(3)"),
    ],
)
def test_quote_unquote(run, source, expected):
    result = run(source)
    assert isinstance(result, Quote)
    assert str(result.node) == expected


def test_unquote_with_wrong_arity_is_left_alone(run):
    assert str(run("quote(unquote(1, 2))").node) == "unquote(1, 2)"


def test_quote_in_function_body_is_fresh_each_call(run):
    result = run("let f = fn(x) { quote(unquote(x) + 1) }; f(1); f(2)")
    assert str(result.node) == "(2 + 1)"


def test_quote_does_not_modify_source_tree(env):
    node = ast.InfixExpression(
        ast.CallExpression(ast.Identifier("unquote"), [ast.IntegerLiteral(1)]),
        "+",
        ast.IntegerLiteral(2),
    )
    quoted = quote(node, env)
    assert str(quoted.node) == "(1 + 2)"
    assert str(node) == "(unquote(1) + 2)"


def test_quote_uses_the_given_environment():
    env = Environment()
    env.define("n", Integer(7))
    node = ast.CallExpression(ast.Identifier("unquote"), [ast.Identifier("n")])
    assert quote(node, env).node == ast.IntegerLiteral(7)


def test_unquote_of_unsupported_value_fails(run):
    with pytest.raises(MonkeyTypeError) as excinfo:
        run('quote(unquote("a"))')
    assert str(excinfo.value) == "cannot convert STRING to an AST node"


def test_quote_arity(run):
    with pytest.raises(MonkeyArityError) as excinfo:
        run("quote()")
    assert str(excinfo.value) == "quote() takes one arg, got 0"
    with pytest.raises(MonkeyArityError):
        run("quote(1, 2)")


def test_unquote_outside_quote_is_undefined(run):
    with pytest.raises(MonkeyNameError):
        run("unquote(1)")


def test_object_to_ast():
    assert object_to_ast(Integer(3)) == ast.IntegerLiteral(3)
    assert object_to_ast(TRUE) == ast.BooleanLiteral(True)
    assert object_to_ast(FALSE) == ast.BooleanLiteral(False)
    node = ast.Identifier("x")
    assert object_to_ast(Quote(node)) is node
    with pytest.raises(MonkeyTypeError):
        object_to_ast(String("x"))

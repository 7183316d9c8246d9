class MonkeyError(Exception):
    """ Base class for all Monkey errors"""
    pass


class MonkeySyntaxError(MonkeyError):
    """ Raised when a program has parser diagnostics and must not be evaluated"""

    def __init__(self, errors: list[str]):
        super().__init__("\n\t".join(errors))
        self.errors = list(errors)


class MonkeyEvalError(MonkeyError):
    """ Raised when evaluation hits a semantically invalid operation"""


class MonkeyTypeError(MonkeyEvalError):
    """ Raised when an operator or builtin gets operands of the wrong type"""


class MonkeyArityError(MonkeyEvalError):
    """ Raised when a function or builtin is called with the wrong number of arguments"""


class MonkeyNameError(MonkeyEvalError):
    """ Raised when a name is neither bound nor a builtin"""


class MonkeyRecursionError(MonkeyEvalError):
    """ Raised when an evaluated program exhausts the call stack"""

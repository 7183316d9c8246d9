from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Literal, Optional

from monkey.ast import Program
from monkey.builtin.env_builtin import Builtins, default_builtins
from monkey.config import get_prelude_files, get_recursion_limit
from monkey.errors import MonkeySyntaxError
from monkey.evaluation.evaluator import evaluate
from monkey.reader.parser import parse
from monkey.types.environment import Environment
from monkey.types.objects import MonkeyObject

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Parses and evaluates Monkey source against one Environment that persists
    across calls, so later inputs see earlier `let` bindings.
    """

    def __init__(
        self,
        prelude: str | None | Literal['auto'] = 'auto',
        *,
        builtins: Optional[Builtins] = None,
        recursion_limit: Optional[int] = None,
    ):
        self.builtins: Builtins = builtins if builtins is not None else default_builtins()
        self.env: Environment = Environment()
        self.recursion_limit = recursion_limit if recursion_limit is not None else get_recursion_limit()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            self.load_prelude()
        elif prelude:
            self.eval(prelude)

    def load_prelude(self) -> None:
        """Evaluate every prelude file found via MONKEY_PRELUDE_PATH (or the packaged one)."""
        for path in get_prelude_files():
            logger.debug("Loading prelude %s", path)
            self.eval(path.read_text(encoding='utf-8'))

    def parse(self, code: str) -> Program:
        try:
            return parse(code)
        except MonkeySyntaxError as e:
            logger.debug("Parser reported %d error(s)", len(e.errors))
            raise

    def eval(self, code: str) -> MonkeyObject:
        """Parse and evaluate `code`; raises MonkeySyntaxError instead of evaluating a bad program."""
        program = self.parse(code)
        with self._recursion_limit():
            return evaluate(program, self.env, self.builtins)

    @contextmanager
    def _recursion_limit(self) -> Iterator[None]:
        if self.recursion_limit is None:
            yield
            return
        previous = sys.getrecursionlimit()
        if self.recursion_limit != previous:
            logger.debug("Recursion limit %d -> %d", previous, self.recursion_limit)
        sys.setrecursionlimit(self.recursion_limit)
        try:
            yield
        finally:
            sys.setrecursionlimit(previous)

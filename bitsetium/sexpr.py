"""
bitsetium/sexpr.py — Set-expression language
=============================================

A small S-expression language for building lazy compositions, used by the
command-line tool and handy in tests and diagnostics::

    (set 1 3 5)                         literal of the configured capacity
    (range 0 10)                        indices [0, 10)
    (empty)  (full)
    (complement X)        alias: not
    (union X Y ...)       alias: or
    (intersection X Y ...) alias: and
    (difference X Y ...)  alias: minus
    name                                a bitset bound in the environment

N-ary forms fold left, so ``(union a b c)`` is ``a.union(b).union(c)``.
Every form is built through the algebra operators, so the rewrite rules
apply exactly as they do for hand-written code.

Parsing uses the ``sexpdata`` library.
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import sexpdata

from bitsetium.config import EvalConfig
from bitsetium.errors import ExpressionError
from bitsetium.ops import BitSetLike

logger = logging.getLogger(__name__)


# ===================================================================
#  PART 1 — S-EXPRESSION PARSING LAYER
# ===================================================================

class Name(str):
    """A bare symbol in a normalised expression tree."""

    def __repr__(self) -> str:
        return f"Name({str.__repr__(self)})"


def _normalise(obj: Any) -> Any:
    """Recursively convert sexpdata output to lists, ints and ``Name``."""
    if isinstance(obj, list):
        return [_normalise(x) for x in obj]
    if isinstance(obj, sexpdata.Symbol):
        value = getattr(obj, "value", None)
        return Name(value() if callable(value) else str(obj))
    if isinstance(obj, bool):
        raise ExpressionError(f"boolean literal {obj!r} is not a set expression", obj)
    if isinstance(obj, int):
        return obj
    raise ExpressionError(f"unsupported literal {obj!r}", obj)


def parse_expression(text: str) -> Any:
    """
    Parse ``text`` into a normalised tree of lists, ints and ``Name``.

    Raises
    ------
    ExpressionError
        If the text is not a single well-formed S-expression.
    """
    if not text or not text.strip():
        raise ExpressionError("empty expression")
    try:
        parsed = sexpdata.loads(text)
    except Exception as e:
        raise ExpressionError(f"failed to parse S-expression: {e}") from e
    return _normalise(parsed)


def to_source(tree: Any) -> str:
    """Render a normalised tree back to S-expression text."""
    if isinstance(tree, list):
        return "(" + " ".join(to_source(x) for x in tree) + ")"
    return str(tree)


# ===================================================================
#  PART 2 — EVALUATION
# ===================================================================

_FOLDS: Dict[str, Callable[[Any, Any], Any]] = {
    "union": lambda a, b: a.union(b),
    "intersection": lambda a, b: a.intersection(b),
    "difference": lambda a, b: a.difference(b),
}

_ALIASES: Dict[str, str] = {
    "not": "complement",
    "or": "union",
    "and": "intersection",
    "minus": "difference",
}


class Evaluator:
    """Evaluates normalised trees against an environment of named sets."""

    def __init__(self, capacity: type,
                 env: Optional[Mapping[str, Any]] = None) -> None:
        self.capacity = capacity
        self.env: Dict[str, Any] = {}
        for name, value in (env or {}).items():
            if not isinstance(value, BitSetLike):
                raise ExpressionError(
                    f"binding {name!r} is not a bitset: {type(value).__name__}")
            self.env[name] = value

    def evaluate(self, tree: Any) -> Any:
        if isinstance(tree, Name):
            if tree not in self.env:
                raise ExpressionError(f"unbound name {str(tree)!r}", tree)
            return self.env[tree]
        if not isinstance(tree, list):
            raise ExpressionError(f"expected a form or a name, got {tree!r}", tree)
        if not tree or not isinstance(tree[0], Name):
            raise ExpressionError(f"form must start with an operator: {to_source(tree)}", tree)

        op = _ALIASES.get(tree[0], str(tree[0]))
        args = tree[1:]

        if op == "set":
            return self.capacity.from_indices(self._indices(tree, args))
        if op == "range":
            if len(args) != 2:
                raise ExpressionError("range takes exactly two bounds", tree)
            lo, hi = self._indices(tree, args)
            return self.capacity.from_indices(range(lo, hi))
        if op in ("empty", "full"):
            if args:
                raise ExpressionError(f"{op} takes no arguments", tree)
            return getattr(self.capacity, op)()
        if op == "complement":
            if len(args) != 1:
                raise ExpressionError("complement takes exactly one operand", tree)
            return self.evaluate(args[0]).complement()
        if op in _FOLDS:
            if not args:
                raise ExpressionError(f"{op} needs at least one operand", tree)
            return reduce(_FOLDS[op], (self.evaluate(a) for a in args))
        raise ExpressionError(f"unknown operator {op!r}", tree)

    @staticmethod
    def _indices(tree: Any, args: List[Any]) -> List[int]:
        for arg in args:
            if not isinstance(arg, int):
                raise ExpressionError(
                    f"expected an index, got {to_source(arg)} in {to_source(tree)}", tree)
        return list(args)


def evaluate(expression: Union[str, Any],
             env: Optional[Mapping[str, Any]] = None,
             config: Optional[EvalConfig] = None) -> Any:
    """
    Build the bitset described by ``expression``.

    Parameters
    ----------
    expression : str or normalised tree
        Source text, or the output of ``parse_expression``.
    env : mapping, optional
        Named bitsets referenced by bare symbols.
    config : EvalConfig, optional
        Selects the capacity of ``set``/``range``/``empty``/``full``
        literals (default 256 bits).
    """
    config = config or EvalConfig()
    capacity = config.resolved()
    tree = parse_expression(expression) if isinstance(expression, str) else expression
    logger.debug("Evaluating %s with capacity %s", to_source(tree), capacity.__name__)
    return Evaluator(capacity, env).evaluate(tree)


__all__ = [
    "Name",
    "parse_expression",
    "to_source",
    "Evaluator",
    "evaluate",
]

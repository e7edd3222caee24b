"""
Restricted arithmetic expressions for reference channels.

A reference is written in the references study design table as a formula
over reporter aliases, e.g. ``"Ref"``, ``"(S1 + S2) / 2"`` or
``"mean(S1, S2, S3)"``. Expressions are parsed with :mod:`ast` and
evaluated node by node against the columns of a wide abundance table.
Only numbers, alias names, arithmetic operators and a few row-wise
functions are accepted; nothing is passed to ``eval``.
"""

import ast
import operator
import re
from typing import Callable, Dict, Iterable, List, Union

import numpy as np
import pandas as pd

from plexquant.core.exceptions import ConfigurationError

Operand = Union[pd.Series, float]

_BACKTICK_NAME = re.compile(r"`([^`]+)`")

_BINARY_OPERATORS: Dict[type, Callable] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
    # R-style power, as in "S1^2"
    ast.BitXor: operator.pow,
}

_UNARY_OPERATORS: Dict[type, Callable] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def _rowwise(reducer: str) -> Callable[[pd.DataFrame], pd.Series]:
    def apply(frame: pd.DataFrame) -> pd.Series:
        return getattr(frame, reducer)(axis=1, skipna=False)

    return apply


# Functions taking any number of operands, reduced across operands per species
REDUCING_FUNCTIONS: Dict[str, Callable[[pd.DataFrame], pd.Series]] = {
    "mean": _rowwise("mean"),
    "median": _rowwise("median"),
    "sum": _rowwise("sum"),
    "min": _rowwise("min"),
    "max": _rowwise("max"),
}

# Functions taking exactly one operand, applied element-wise
ELEMENTWISE_FUNCTIONS: Dict[str, Callable] = {
    "sqrt": np.sqrt,
    "log2": np.log2,
    "log10": np.log10,
    "exp": np.exp,
    "abs": np.abs,
}


class ReferenceExpression:
    """
    A parsed reference formula.

    Parameters
    ----------
    text : str
        The formula. Aliases that are not valid Python identifiers
        (e.g. ``126C``) can be quoted with backticks.

    Raises
    ------
    ConfigurationError
        If the formula is empty, malformed, or uses anything besides
        numbers, names, arithmetic and the allowed functions.
    """

    def __init__(self, text: str):
        if text is None or (isinstance(text, float) and np.isnan(text)):
            raise ConfigurationError("Reference expression is missing.")
        self.text = str(text).strip()
        if not self.text:
            raise ConfigurationError("Reference expression is empty.")

        self._quoted: Dict[str, str] = {}

        def _placeholder(match: re.Match) -> str:
            key = f"__alias_{len(self._quoted)}__"
            self._quoted[key] = match.group(1)
            return key

        source = _BACKTICK_NAME.sub(_placeholder, self.text)
        try:
            self._tree = ast.parse(source, mode="eval")
        except SyntaxError as e:
            raise ConfigurationError(f"Malformed reference expression {self.text!r}: {e.msg}")

        self._validate(self._tree.body)

    @property
    def names(self) -> List[str]:
        """Reporter aliases referenced by the expression, in order of appearance."""
        seen = []
        nodes = [node for node in ast.walk(self._tree) if isinstance(node, ast.Name)]
        for node in sorted(nodes, key=lambda n: n.col_offset):
            if not self._is_function_name(node):
                name = self._quoted.get(node.id, node.id)
                if name not in seen:
                    seen.append(name)
        return seen

    def _is_function_name(self, node: ast.Name) -> bool:
        return any(
            isinstance(parent, ast.Call) and parent.func is node for parent in ast.walk(self._tree)
        )

    def _fail(self, reason: str):
        raise ConfigurationError(f"Unsupported reference expression {self.text!r}: {reason}")

    def _validate(self, node: ast.AST) -> None:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                self._fail(f"literal {node.value!r} is not a number")
        elif isinstance(node, ast.Name):
            pass
        elif isinstance(node, ast.BinOp):
            if type(node.op) not in _BINARY_OPERATORS:
                self._fail(f"operator {type(node.op).__name__} is not allowed")
            self._validate(node.left)
            self._validate(node.right)
        elif isinstance(node, ast.UnaryOp):
            if type(node.op) not in _UNARY_OPERATORS:
                self._fail(f"operator {type(node.op).__name__} is not allowed")
            self._validate(node.operand)
        elif isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name):
                self._fail("only plain function names can be called")
            name = node.func.id
            if node.keywords:
                self._fail(f"keyword arguments are not allowed in {name}()")
            if name in REDUCING_FUNCTIONS:
                if not node.args:
                    self._fail(f"{name}() needs at least one argument")
            elif name in ELEMENTWISE_FUNCTIONS:
                if len(node.args) != 1:
                    self._fail(f"{name}() takes exactly one argument")
            else:
                allowed = sorted(REDUCING_FUNCTIONS) + sorted(ELEMENTWISE_FUNCTIONS)
                self._fail(f"unknown function {name}(), allowed are {allowed}")
            for arg in node.args:
                if isinstance(arg, ast.Starred):
                    self._fail("starred arguments are not allowed")
                self._validate(arg)
        else:
            self._fail(f"{type(node).__name__} is not allowed")

    def evaluate(self, table: pd.DataFrame, known_names: Iterable[str] = ()) -> pd.Series:
        """
        Evaluate the expression against the columns of ``table``.

        Parameters
        ----------
        table : pd.DataFrame
            Wide table, one row per species and one column per reporter alias.
        known_names : Iterable[str]
            Aliases that are valid even without a column in ``table``; they
            evaluate to missing values.

        Returns
        -------
        pd.Series
            One reference value per row of ``table``.

        Raises
        ------
        ConfigurationError
            If the expression references an unknown alias.
        """
        known = set(str(name) for name in known_names)
        unknown = [name for name in self.names if name not in table.columns and name not in known]
        if unknown:
            raise ConfigurationError(
                f"Reference expression {self.text!r} uses unknown reporter aliases {unknown}; "
                f"available are {sorted(set(map(str, table.columns)) | known)}"
            )

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            value = self._eval(self._tree.body, table)

        if isinstance(value, pd.Series):
            return value.astype(float)
        return pd.Series(float(value), index=table.index)

    def _eval(self, node: ast.AST, table: pd.DataFrame) -> Operand:
        if isinstance(node, ast.Constant):
            return np.float64(node.value)
        if isinstance(node, ast.Name):
            name = self._quoted.get(node.id, node.id)
            if name in table.columns:
                return table[name].astype(float)
            return pd.Series(np.nan, index=table.index)
        if isinstance(node, ast.BinOp):
            left = self._eval(node.left, table)
            right = self._eval(node.right, table)
            return _BINARY_OPERATORS[type(node.op)](left, right)
        if isinstance(node, ast.UnaryOp):
            return _UNARY_OPERATORS[type(node.op)](self._eval(node.operand, table))
        if isinstance(node, ast.Call):
            args = [self._eval(arg, table) for arg in node.args]
            name = node.func.id
            if name in ELEMENTWISE_FUNCTIONS:
                return ELEMENTWISE_FUNCTIONS[name](args[0])
            frame = pd.concat(
                [
                    arg if isinstance(arg, pd.Series) else pd.Series(arg, index=table.index)
                    for arg in args
                ],
                axis=1,
                ignore_index=True,
            )
            return REDUCING_FUNCTIONS[name](frame)
        self._fail(f"{type(node).__name__} is not allowed")

    def __repr__(self) -> str:
        return f"ReferenceExpression({self.text!r})"

"""Substitute values into LaTeX equations and assemble calculation steps."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from option_pricing.calculation.equation import EquationModel
from option_pricing.errors import InvalidArgumentError, check_not_none

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+")
_NON_WORD = re.compile(r"\W")


def key_pattern(key: str) -> str:
    """Regex matching ``key`` inside an equation.

    Bare identifiers (``x``, ``d_1``) only match as whole words, so ``x`` never
    matches inside ``xx``, ``2x`` or ``x_``. Any other key (``\\sigma``,
    ``f(a)``) is matched literally with every non-word character escaped.
    """
    if _WORD.fullmatch(key):
        return rf"\b{key}\b"
    return _NON_WORD.sub(lambda m: "\\" + m.group(0), key)


def _replacement(value: EquationModel) -> str:
    # re.sub expands backslashes in the replacement, so double them
    return value.formatted_value().replace("\\", "\\\\")


def substitute(equation: str, values: Sequence[EquationModel]) -> str:
    """Replace every key in ``equation`` with its formatted value.

    Values are applied one after another in the given order. A replacement that
    itself contains a later key is therefore substituted again.

    Raises:
        InvalidArgumentError: If ``equation`` is blank or ``values`` is empty.
    """
    check_not_none(equation, "equation")
    check_not_none(values, "values")
    if not equation.strip():
        raise InvalidArgumentError("equation can't be blank/empty")
    if len(values) == 0:
        raise InvalidArgumentError("values can't be empty")

    substituted = equation
    for value in values:
        substituted = re.sub(key_pattern(value.key), _replacement(value), substituted)
    return substituted


def solve(
    formula: Sequence[str],
    values: Sequence[EquationModel],
    answer: str | None = None,
) -> list[str]:
    """Build one calculation step from a formula.

    The returned list is ``formula`` followed by its last part with ``values``
    substituted in, followed by ``answer`` when given. With no values the
    substituted part is omitted.

    Raises:
        InvalidArgumentError: If ``formula`` is empty.
    """
    check_not_none(formula, "formula")
    if len(formula) == 0:
        raise InvalidArgumentError("formula can't be empty")

    step = list(formula)
    if values:
        step.append(substitute(formula[-1], values))
    if answer is not None:
        step.append(answer)

    logger.debug("Solved step %s with %d value(s)", step[0], len(values or ()))
    return step

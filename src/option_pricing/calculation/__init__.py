"""Symbolic calculation traces: formatting, substitution and step assembly."""

from . import latex
from .equation import EquationModel
from .latex import Delimiter
from .precision import PrecisionMode, precision
from .substitution import solve, substitute
from .trace import CalculationTrace

__all__ = [
    "latex",
    "Delimiter",
    "PrecisionMode",
    "EquationModel",
    "CalculationTrace",
    "precision",
    "substitute",
    "solve",
]

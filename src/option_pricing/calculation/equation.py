"""Substitution tokens for symbolic equations."""

from __future__ import annotations

from dataclasses import dataclass

from option_pricing.calculation.latex import Delimiter, sub_formula
from option_pricing.calculation.precision import (
    PrecisionMode,
    PrecisionModeInput,
    normalize_precision_mode,
    precision,
)
from option_pricing.errors import (
    InvalidArgumentError,
    InvalidStateError,
    MissingRequiredValueError,
    check_not_none,
)


@dataclass(frozen=True, slots=True)
class EquationModel:
    """One symbol to replace in an equation and the value replacing it.

    Exactly one of ``number_value`` / ``string_value`` is set. A precision policy is
    only allowed together with ``number_value``; use ``string_value`` when a number
    must keep trailing zeros exactly as written.

    Prefer the ``number`` / ``text`` constructors over the raw field list.
    """

    key: str
    number_value: float | None = None
    string_value: str | None = None
    delimiter: Delimiter = Delimiter.NONE
    precision_digits: int | None = None
    precision_mode: PrecisionMode = PrecisionMode.UNCHANGED

    def __post_init__(self) -> None:
        check_not_none(self.key, "key")
        if not self.key.strip():
            raise InvalidArgumentError("key can't be empty/blank")

        has_number = self.number_value is not None
        has_string = self.string_value is not None
        if has_number and has_string:
            raise InvalidStateError(
                "number_value and string_value are mutually exclusive"
            )
        if not has_number and not has_string:
            raise MissingRequiredValueError(
                "either number_value or string_value is required"
            )

        check_not_none(self.delimiter, "delimiter")
        object.__setattr__(self, "delimiter", Delimiter(self.delimiter))
        mode = normalize_precision_mode(self.precision_mode)
        object.__setattr__(self, "precision_mode", mode)

        if self.precision_digits is not None or mode != PrecisionMode.UNCHANGED:
            if not has_number:
                raise InvalidStateError("precision can only be set with a number value")
            if mode != PrecisionMode.UNCHANGED and self.precision_digits is None:
                raise InvalidStateError(
                    f"precision mode {mode.value!r} requires precision_digits"
                )
            if self.precision_digits is not None and self.precision_digits < 0:
                raise InvalidArgumentError(
                    "precision_digits must be greater than or equal to zero"
                )

    @classmethod
    def number(
        cls,
        key: str,
        value: float,
        *,
        delimiter: Delimiter = Delimiter.NONE,
        digits: int | None = None,
        mode: PrecisionModeInput = PrecisionMode.UNCHANGED,
    ) -> EquationModel:
        check_not_none(value, "value")
        return cls(
            key=key,
            number_value=value,
            delimiter=delimiter,
            precision_digits=digits,
            precision_mode=mode,
        )

    @classmethod
    def text(
        cls, key: str, value: str, *, delimiter: Delimiter = Delimiter.NONE
    ) -> EquationModel:
        check_not_none(value, "value")
        return cls(key=key, string_value=value, delimiter=delimiter)

    @property
    def has_number_value(self) -> bool:
        return self.number_value is not None

    def formatted_value(self) -> str:
        """Replacement text: the value under its precision policy, delimited."""
        if self.number_value is not None:
            value = precision(
                self.number_value, self.precision_digits, self.precision_mode
            )
        else:
            value = self.string_value
        return sub_formula(value, self.delimiter)

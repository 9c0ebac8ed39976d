"""Calculation trace value object."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from option_pricing.errors import InvalidArgumentError

Step = tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CalculationTrace:
    """Ordered calculation steps explaining one computed value.

    Each step is a tuple of parts ``(symbol?, lhs, rhs, substituted, answer?)``; the
    substituted equation is the second-to-last part whenever the step carries an
    answer. ``answer`` is the unrounded value the trace explains.
    """

    steps: tuple[Step, ...]
    answer: float

    def __post_init__(self) -> None:
        steps = tuple(tuple(str(part) for part in step) for step in self.steps)
        if not steps:
            raise InvalidArgumentError("steps can't be empty")
        if any(len(step) == 0 for step in steps):
            raise InvalidArgumentError("a calculation step can't be empty")
        object.__setattr__(self, "steps", steps)
        object.__setattr__(self, "answer", float(self.answer))

    @classmethod
    def from_steps(
        cls, steps: Sequence[Sequence[str]], answer: float
    ) -> CalculationTrace:
        return cls(steps=tuple(tuple(step) for step in steps), answer=answer)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    @property
    def displayed_answer(self) -> str:
        """Rounded answer as shown at the end of the final step."""
        return self.final_step[-1]

    def as_lists(self) -> list[list[str]]:
        """Fresh nested lists, safe for the caller to mutate."""
        return [list(step) for step in self.steps]

    def to_latex(self, separator: str = " = ") -> list[str]:
        """One LaTeX equation chain per step, parts joined by ``separator``."""
        return [separator.join(part.strip() for part in step) for step in self.steps]

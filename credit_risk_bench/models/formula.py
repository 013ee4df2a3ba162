"""
Model Formula

Declarative "target ~ predictors" model description, e.g.

    bad_flag ~ amount_6 + pur_6 + credit_limit
    bad_flag ~ .            (every column except the target and excluded ones)
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from credit_risk_bench.core.exceptions import FormulaError


ALL_PREDICTORS = "."


@dataclass(frozen=True)
class Formula:
    """A parsed model formula."""
    target: str
    predictors: Tuple[str, ...]

    @property
    def uses_all_predictors(self) -> bool:
        return self.predictors == (ALL_PREDICTORS,)

    @property
    def fields(self) -> Tuple[str, ...]:
        return (self.target,) + self.predictors

    @classmethod
    def parse(cls, text: str) -> "Formula":
        """
        Parse formula text.

        Raises:
            FormulaError: If the text has no single '~', an empty side,
                or duplicate predictor terms.
        """
        if text is None or text.count("~") != 1:
            raise FormulaError(f"Formula must contain exactly one '~': {text!r}")

        lhs, rhs = (side.strip() for side in text.split("~"))
        if not lhs:
            raise FormulaError(f"Formula has no target: {text!r}")

        terms = [t.strip() for t in rhs.split("+")]
        if not rhs or any(not t for t in terms):
            raise FormulaError(f"Formula has an empty predictor term: {text!r}")
        if ALL_PREDICTORS in terms and len(terms) > 1:
            raise FormulaError(f"'.' cannot be combined with other terms: {text!r}")
        if len(set(terms)) != len(terms):
            raise FormulaError(f"Formula repeats a predictor: {text!r}")
        if lhs in terms:
            raise FormulaError(f"Target '{lhs}' is also used as a predictor")

        return cls(target=lhs, predictors=tuple(terms))

    def resolve(
        self,
        columns: Iterable[str],
        exclude: Optional[Iterable[str]] = None,
    ) -> "Formula":
        """
        Bind the formula to concrete dataset columns.

        Args:
            columns: Columns available in the dataset
            exclude: Columns never used as predictors (e.g. the identifier)

        Returns:
            Formula with an explicit predictor list

        Raises:
            FormulaError: If the target or any predictor is not a column.
        """
        columns = list(columns)
        excluded = set(exclude or [])

        if self.uses_all_predictors:
            predictors = tuple(
                c for c in columns if c != self.target and c not in excluded
            )
            if not predictors:
                raise FormulaError(f"No predictor columns left for '{self}'")
        else:
            predictors = self.predictors

        known = set(columns)
        unknown = [f for f in (self.target,) + predictors if f not in known]
        if unknown:
            raise FormulaError(
                f"Formula references unknown fields: {unknown}",
                details={'formula': str(self)},
            )

        return Formula(target=self.target, predictors=predictors)

    def __str__(self) -> str:
        return f"{self.target} ~ {' + '.join(self.predictors)}"

"""
Experiment report.

ExperimentReport holds one ReportCell per configuration, in the order the
configurations were given, and prints them as a fixed-width table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pysimstudy.experiment._common import ReportCell


@dataclass
class ExperimentReport:
    """
    Ordered table of report cells.

    Columns: configuration columns, one rejection-rate column per rule
    (union over cells, first-seen order), then the counts and the
    dispersion columns.
    """
    cells: tuple[ReportCell, ...]
    timing: dict[str, float] | None = field(default=None)

    CONFIG_COLUMNS = ('label', 'sample_size', 'distribution', 'significance_level')
    TRAILING_COLUMNS = ('n_valid', 'n_excluded', 'estimate_sd', 'mean_bootstrap_se')

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, index: int) -> ReportCell:
        return self.cells[index]

    @property
    def rule_columns(self) -> tuple[str, ...]:
        seen: list[str] = []
        for cell in self.cells:
            for name in cell.rates:
                if name not in seen:
                    seen.append(name)
        return tuple(seen)

    @property
    def columns(self) -> tuple[str, ...]:
        return self.CONFIG_COLUMNS + self.rule_columns + self.TRAILING_COLUMNS

    def rows(self) -> list[dict[str, Any]]:
        """One dict per cell, keyed by columns; missing rules are None."""
        out = []
        for cell in self.cells:
            row = cell.as_dict()
            out.append({c: row.get(c) for c in self.columns})
        return out

    def rates(self, rule: str) -> list[float | None]:
        """Rejection-rate column for one rule, in configuration order."""
        return [cell.rates.get(rule) for cell in self.cells]

    def summary(self) -> str:
        """
        Fixed-width table.

        Produces:
            EXPERIMENT REPORT

            label              n  alpha     exact  asymptotic  bootstrap  excluded
            Normal(0, 1)      20   0.05    0.0495      0.0640     0.0525         0
        """
        rules = self.rule_columns
        label_w = max([len('label')] + [len(c.label) for c in self.cells])
        header = (
            f"{'label':<{label_w}s} {'n':>7s} {'alpha':>6s} "
            + " ".join(f"{r:>12s}" for r in rules)
            + f" {'excluded':>9s} {'sd(est)':>10s}"
        )
        lines = ["\nEXPERIMENT REPORT", "", header]
        for cell in self.cells:
            rate_cols = " ".join(
                f"{cell.rates[r]:12.4f}" if r in cell.rates else f"{'-':>12s}"
                for r in rules
            )
            lines.append(
                f"{cell.label:<{label_w}s} {cell.sample_size:7d} "
                f"{cell.significance_level:6g} {rate_cols} "
                f"{cell.n_excluded:9d} {cell.estimate_sd:10.4g}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ExperimentReport(cells={len(self.cells)}, rules={list(self.rule_columns)})"

# family_balance/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

LOGGER = logging.getLogger(__package__)


def _project_root() -> Path:
    """Return the project root (directory containing this file)."""
    return Path(__file__).resolve().parent


@dataclass(frozen=True)
class BalanceConfig:
    """
    Configuration for the family balance scoring pipeline.

    Conceptual role:
    - Holds the tunable knobs around the fixed weight model (the multiplier
      tables themselves are constants in weighting.py, not configuration).
    - Drives the sampler defaults, the balance classification thresholds and
      the demo data generator.

    Design principles:
    - Reproducibility (fixed seed, immutable config)
    - One place for workbook paths and party labels
    """

    # ------------------------------------------------------------------
    # Reproducibility
    # ------------------------------------------------------------------
    seed: int = 7
    # Base seed mixed with the period index for the sampler's variety picks.

    # ------------------------------------------------------------------
    # Recurring check-in sampling
    # ------------------------------------------------------------------
    count_per_category: int = 5
    high_weight_count: int = 3

    # ------------------------------------------------------------------
    # Balance classification (distance of A% from 50)
    # ------------------------------------------------------------------
    good_balance_threshold: float = 10.0
    slight_imbalance_threshold: float = 20.0

    # ------------------------------------------------------------------
    # Follow-up task recommendations
    # ------------------------------------------------------------------
    recommendation_count: int = 3

    # ------------------------------------------------------------------
    # Demo data (simulator.py)
    # ------------------------------------------------------------------
    n_weeks: int = 8
    initial_share_a: float = 0.72
    # Probability that party A handles a task in the initial survey.
    weekly_rebalance: float = 0.03
    # Per-week drift of that probability toward 0.5.
    answer_rate: float = 0.95
    # Share of sampled questions answered in a weekly check-in.

    # ------------------------------------------------------------------
    # Party labels
    # ------------------------------------------------------------------
    assignee_aliases: Dict[str, str] = field(default_factory=lambda: {
        "mama": "A",
        "mom": "A",
        "papa": "B",
        "dad": "B",
    })
    # Lower-cased labels found in response workbooks -> Assignee value.

    # ------------------------------------------------------------------
    # Input / output paths
    # ------------------------------------------------------------------
    question_bank_xlsx: str = field(
        default_factory=lambda: str(_project_root() / "data" / "question_bank.xlsx")
    )
    responses_xlsx: str = field(
        default_factory=lambda: str(_project_root() / "data" / "responses.xlsx")
    )
    output_xlsx: str = field(
        default_factory=lambda: str(_project_root() / "data" / "family_balance_trend.xlsx")
    )
    template_xlsx: str = ""
    # Optional workbook whose sheet headers fix the export column order.

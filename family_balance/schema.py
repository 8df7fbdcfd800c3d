# family_balance/schema.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SheetMap:
    """
    Maps internal DataFrame keys -> Excel sheet names.

    Conceptual role:
    - Centralizes the mapping between pipeline outputs and workbook sheets.
    - Shared by the readers (question bank, responses) and the trend export.
    """

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    questions: str = "questions"
    responses: str = "responses"

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------
    trend: str = "trend"
    category_balance: str = "category_balance"
    next_questions: str = "next_questions"
    recommendations: str = "recommendations"

    def output_sheets(self) -> dict:
        """DataFrame key -> sheet name for the trend workbook."""
        return {
            "trend": self.trend,
            "category_balance": self.category_balance,
            "next_questions": self.next_questions,
            "recommendations": self.recommendations,
        }

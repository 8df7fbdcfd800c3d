"""End-to-end run of the pipeline on built-in questions and simulated responses."""

from openpyxl import load_workbook

from family_balance.config import BalanceConfig
from family_balance.main import run
from family_balance.model import FamilyPriorities


def test_run_writes_trend_workbook(tmp_path, capsys):
    cfg = BalanceConfig(
        n_weeks=3,
        question_bank_xlsx=str(tmp_path / "missing_bank.xlsx"),
        responses_xlsx=str(tmp_path / "missing_responses.xlsx"),
        output_xlsx=str(tmp_path / "out" / "trend.xlsx"),
    )
    dfs = run(cfg, FamilyPriorities.from_record({"highestPriority": "InvisibleParental"}))

    assert len(dfs["trend"]) == 4
    assert len(dfs["next_questions"]) == 20
    assert len(dfs["recommendations"]) == 3
    assert set(dfs["next_questions"]["impact"]) <= {"very_high", "high", "medium", "standard"}

    wb = load_workbook(cfg.output_xlsx)
    assert wb.sheetnames == ["trend", "category_balance", "next_questions", "recommendations"]

    out = capsys.readouterr().out
    assert "Using built-in question bank" in out
    assert "Using simulated responses (4 periods)" in out


def test_run_uses_configured_status_thresholds(tmp_path):
    cfg = BalanceConfig(
        n_weeks=2,
        good_balance_threshold=100.0,
        slight_imbalance_threshold=100.0,
        question_bank_xlsx=str(tmp_path / "missing_bank.xlsx"),
        responses_xlsx=str(tmp_path / "missing_responses.xlsx"),
        output_xlsx=str(tmp_path / "trend.xlsx"),
    )
    dfs = run(cfg)
    assert set(dfs["trend"]["status"]) == {"well_balanced"}

"""Tests for workbook readers and the trend export."""

import pandas as pd
import pytest
from openpyxl import Workbook, load_workbook

from family_balance.io_excel import (
    ensure_columns,
    read_question_bank_xlsx,
    read_response_history_xlsx,
    safe_sheet_to_df,
    write_trend_workbook,
)
from family_balance.model import INITIAL, Category, Frequency


def _workbook(path, sheet, rows):
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    for r in rows:
        ws.append(r)
    wb.save(path)
    return path


class TestReaders:
    def test_question_bank(self, tmp_path):
        path = _workbook(tmp_path / "bank.xlsx", "questions", [
            ["id", "text", "category", "base_weight", "frequency", "invisibility", None],
            ["q1", "Who cooks?", "Visible Household Tasks", 4, "DAILY", "HighlyVisible", "junk"],
            ["q2", "Who plans?", "InvisibleHousehold", None, None, None, None],
            [None, None, None, None, None, None, None],
        ])
        questions = read_question_bank_xlsx(str(path))
        assert [q.id for q in questions] == ["q1", "q2"]
        assert questions[0].category == Category.VISIBLE_HOUSEHOLD
        assert questions[0].frequency == Frequency.DAILY
        assert questions[1].base_weight == 3

    def test_question_bank_with_question_id_header(self, tmp_path):
        path = _workbook(tmp_path / "bank.xlsx", "questions", [
            ["question_id", "text", "category"],
            ["q7", "Who packs lunches?", "VisibleParental"],
        ])
        questions = read_question_bank_xlsx(str(path))
        assert [q.id for q in questions] == ["q7"]

    def test_response_history(self, tmp_path):
        path = _workbook(tmp_path / "responses.xlsx", "responses", [
            ["period", "question_id", "assignee"],
            [2, "q1", "Papa"],
            ["Initial", "q1", "Mama"],
            ["Initial", "q2", "B"],
            [1, "q1", "A"],
            [1, "q1", "B"],
            [1, "q3", None],
        ])
        history = read_response_history_xlsx(str(path), aliases={"Mama": "A", "Papa": "B"})
        assert [p for p, _ in history] == [INITIAL, 1, 2]
        assert history[0][1] == {"q1": "A", "q2": "B"}
        assert history[1][1] == {"q1": "B"}
        assert history[2][1] == {"q1": "B"}

    def test_response_history_missing_columns(self, tmp_path):
        path = _workbook(tmp_path / "bad.xlsx", "responses", [["period", "who"], [1, "A"]])
        with pytest.raises(ValueError, match="missing columns"):
            read_response_history_xlsx(str(path))


class TestWriter:
    def test_fresh_workbook(self, tmp_path):
        out = tmp_path / "trend.xlsx"
        dfs = {
            "trend": pd.DataFrame({"period": [INITIAL, 1], "overall_a": [70.0, 55.5]}),
            "category_balance": pd.DataFrame({"category": ["VisibleHousehold"], "imbalance": [pd.NA]}),
        }
        write_trend_workbook(str(out), dfs, {"trend": "trend", "category_balance": "cats"})

        wb = load_workbook(out)
        assert wb.sheetnames == ["trend", "cats"]
        df = safe_sheet_to_df(wb["trend"])
        assert list(df.columns) == ["period", "overall_a"]
        assert list(df["overall_a"]) == [70.0, 55.5]
        assert wb["cats"]["B2"].value is None

    def test_template_fixes_column_order(self, tmp_path):
        template = _workbook(tmp_path / "template.xlsx", "trend", [["overall_a", "period", "notes"]])
        out = tmp_path / "trend.xlsx"
        dfs = {"trend": pd.DataFrame({"period": [1], "overall_a": [60.0], "extra": [1]})}
        write_trend_workbook(str(out), dfs, {"trend": "trend"}, template_xlsx=str(template))

        df = safe_sheet_to_df(load_workbook(out)["trend"])
        assert list(df.columns) == ["overall_a", "period", "notes"]
        assert df.iloc[0]["overall_a"] == 60.0

    def test_missing_frame_key(self, tmp_path):
        with pytest.raises(KeyError):
            write_trend_workbook(str(tmp_path / "x.xlsx"), {}, {"trend": "trend"})

    def test_ensure_columns(self):
        df = ensure_columns(pd.DataFrame({"b": [1], "c": [2]}), ["a", "b"])
        assert list(df.columns) == ["a", "b"]
        assert pd.isna(df.iloc[0]["a"])

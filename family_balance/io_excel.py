# family_balance/io_excel.py
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .config import LOGGER
from .model import Period, Question, normalize_period, period_sort_key
from .question_bank import load_question_bank


def _clean_colname(x: object) -> str:
    """Normalize Excel header cell to a clean column name."""
    if x is None:
        return ""
    s = str(x).strip()
    # guard against common junk headers
    if s.lower() in {"none", "nan", "null"}:
        return ""
    return s


def safe_sheet_to_df(ws: Worksheet) -> pd.DataFrame:
    """
    Read a worksheet where the first row is a header.

    Robustness:
    - Trims header whitespace
    - Drops empty/None headers
    - Drops fully-empty rows
    """
    rows = list(ws.values)
    if not rows:
        return pd.DataFrame()

    header = [_clean_colname(x) for x in rows[0]]
    keep = [i for i, h in enumerate(header) if h]
    if not keep:
        return pd.DataFrame()

    data = []
    for r in rows[1:]:
        if r is None:
            continue
        rr = [r[i] if i < len(r) else None for i in keep]
        if all(v is None for v in rr):
            continue
        data.append(rr)

    return pd.DataFrame(data, columns=[header[i] for i in keep])


def write_df_to_sheet(ws: Worksheet, df: pd.DataFrame) -> None:
    """
    Overwrite worksheet with DataFrame content.

    Coerces numpy scalars to Python types for openpyxl compatibility.
    """
    if ws.max_row and ws.max_row > 0:
        ws.delete_rows(1, ws.max_row)

    ws.append([str(c) for c in df.columns])

    for row in df.itertuples(index=False, name=None):
        out = []
        for v in row:
            if v is None or (not isinstance(v, str) and pd.isna(v)):
                out.append(None)
            elif hasattr(v, "item"):
                out.append(v.item())
            else:
                out.append(v)
        ws.append(out)


def ensure_columns(df: pd.DataFrame, cols: List[str]) -> pd.DataFrame:
    """
    Ensure df has all columns in `cols`:
    - Add missing columns as NA
    - Drop extra columns not in `cols`
    - Return in the exact `cols` order
    """
    df = df.copy()
    df.columns = [str(c).strip() for c in df.columns]

    for c in cols:
        if c not in df.columns:
            df[c] = pd.NA

    return df[cols]


def write_trend_workbook(
    output_xlsx: str,
    dfs: Dict[str, pd.DataFrame],
    sheet_map: Dict[str, str],
    template_xlsx: Optional[str] = None,
) -> None:
    """
    Write DataFrames into a workbook, one sheet per `sheet_map` entry.

    Behavior:
    - With a template workbook: sheets that already carry a header keep that
      column order (missing columns added empty, extra columns dropped)
    - Otherwise a fresh workbook is created and each df written as-is
    """
    if template_xlsx:
        wb = load_workbook(template_xlsx)
    else:
        wb = Workbook()
        wb.remove(wb.active)

    for df_key, sheet_name in sheet_map.items():
        if df_key not in dfs:
            raise KeyError(f"DataFrame key '{df_key}' missing from dfs. Available: {list(dfs.keys())}")

        df = dfs[df_key].copy()
        df.columns = [str(c).strip() for c in df.columns]

        if sheet_name in wb.sheetnames:
            ws = wb[sheet_name]
            existing = safe_sheet_to_df(ws)
            if len(existing.columns) > 0:
                df = ensure_columns(df, list(existing.columns))
        else:
            ws = wb.create_sheet(sheet_name)
        write_df_to_sheet(ws, df)

    wb.save(output_xlsx)


def read_question_bank_xlsx(path: str, sheet: str = "questions") -> List[Question]:
    """Load questions from a workbook sheet (one row per question)."""
    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        df = safe_sheet_to_df(wb[sheet])
    finally:
        wb.close()

    records = [
        {k: (None if pd.isna(v) else v) for k, v in rec.items()}
        for rec in df.to_dict(orient="records")
    ]
    return load_question_bank(records)


def read_response_history_xlsx(
    path: str,
    sheet: str = "responses",
    aliases: Optional[Mapping[str, str]] = None,
) -> List[Tuple[Period, Dict[str, str]]]:
    """
    Load responses from rows of (period, question_id, assignee).

    Later rows overwrite earlier ones for the same (period, question_id).
    Returns (period, responses) pairs in period order.
    """
    aliases = {str(k).lower(): v for k, v in (aliases or {}).items()}

    wb = load_workbook(path, read_only=True, data_only=True)
    try:
        df = safe_sheet_to_df(wb[sheet])
    finally:
        wb.close()

    missing = [c for c in ("period", "question_id", "assignee") if c not in df.columns]
    if missing:
        raise ValueError(f"Responses sheet '{sheet}' is missing columns: {missing}")

    by_period: Dict[Period, Dict[str, str]] = {}
    for rec in df.to_dict(orient="records"):
        qid, who = rec["question_id"], rec["assignee"]
        if qid is None or pd.isna(qid) or who is None or pd.isna(who):
            continue
        period = normalize_period(rec["period"])
        label = str(who).strip()
        by_period.setdefault(period, {})[str(qid).strip()] = aliases.get(label.lower(), label)

    LOGGER.debug("Read responses for %d periods from %s", len(by_period), path)
    return sorted(by_period.items(), key=lambda kv: period_sort_key(kv[0]))

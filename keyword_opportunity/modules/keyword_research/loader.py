"""Load raw keyword metric records and ranking pages from JSON or CSV exports."""

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".csv")


def _check_path(path: str | Path) -> Path:
    file_path = Path(path)
    if file_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported input file {file_path.name!r}; expected one of {SUPPORTED_SUFFIXES}"
        )
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")
    return file_path


def load_records(path: str | Path) -> list[dict[str, Any]]:
    """Read raw keyword records.

    JSON files hold either a list of records or an object with a
    ``records`` (or ``keywords``) list.  CSV files need a ``keyword``
    column; empty cells arrive as NaN and are defaulted downstream.

    Raises:
        ValueError: for an unsupported file type or malformed content.
        FileNotFoundError: if *path* does not exist.
    """
    file_path = _check_path(path)

    if file_path.suffix.lower() == ".csv":
        df = pd.read_csv(file_path)
        if "keyword" not in df.columns:
            raise ValueError(f"CSV file {file_path.name!r} has no 'keyword' column")
        records = df.to_dict(orient="records")
    else:
        with open(file_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if isinstance(data, dict):
            data = data.get("records", data.get("keywords"))
        if not isinstance(data, list):
            raise ValueError(f"JSON file {file_path.name!r} must contain a list of records")
        records = [item for item in data if isinstance(item, dict)]

    logger.info("Loaded %d raw records from %s", len(records), file_path)
    return records


def load_ranking_pages(path: str | Path) -> dict[str, list[dict[str, Any]]]:
    """Read ranking pages as a ``keyword -> [page, ...]`` mapping.

    JSON files hold the mapping directly.  CSV files hold one row per page
    with ``keyword`` and ``url`` columns plus optional ``title``,
    ``domain`` and ``position``.
    """
    file_path = _check_path(path)

    if file_path.suffix.lower() == ".csv":
        df = pd.read_csv(file_path)
        missing = {"keyword", "url"} - set(df.columns)
        if missing:
            raise ValueError(f"CSV file {file_path.name!r} lacks columns: {sorted(missing)}")
        df = df.astype(object).where(pd.notna(df), None)
        pages: dict[str, list[dict[str, Any]]] = {}
        for keyword, group in df.groupby("keyword", sort=False):
            pages[str(keyword)] = group.drop(columns=["keyword"]).to_dict(orient="records")
    else:
        with open(file_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"JSON file {file_path.name!r} must map keywords to page lists")
        pages = {str(k): list(v or []) for k, v in data.items()}

    logger.info("Loaded ranking pages for %d keywords from %s", len(pages), file_path)
    return pages

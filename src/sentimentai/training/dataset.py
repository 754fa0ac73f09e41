# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Mapping, Sequence

import pandas as pd
from sklearn.model_selection import train_test_split

from ..errors import DataFormatError, NotFoundError
from ..features import safe_text
from ..schemas import DEFAULT_COLUMNS, Record

logger = logging.getLogger(__name__)

LABEL_VALUES = {"0": False, "1": True}
TRAIN_SNAPSHOT = "train_dataset.parquet"
EVAL_SNAPSHOT = "eval_dataset.parquet"


def _check_columns(columns: Mapping[str, int]) -> int:
    missing = {"text", "label"} - set(columns)
    if missing:
        raise ValueError(f"Column mapping is missing fields: {sorted(missing)}")
    indexes = sorted(int(index) for index in columns.values())
    if indexes != list(range(len(indexes))):
        raise ValueError(f"Column indexes must be contiguous from 0, got {indexes}")
    return len(indexes)


def parse_line(line: str, *, columns: Mapping[str, int] = DEFAULT_COLUMNS, where: str = "<line>") -> Record:
    expected = _check_columns(columns)
    fields = line.split("\t")
    if len(fields) != expected:
        raise DataFormatError(f"{where}: expected {expected} tab-separated fields, got {len(fields)}")
    raw_label = fields[columns["label"]].strip()
    if raw_label not in LABEL_VALUES:
        raise DataFormatError(f"{where}: label must be 0 or 1, got {raw_label!r}")
    return Record(text=fields[columns["text"]], label=LABEL_VALUES[raw_label])


def _from_parquet(path: Path, columns: Mapping[str, int]) -> list[Record]:
    if dict(columns) != DEFAULT_COLUMNS:
        raise ValueError(f"{path}: parquet snapshots always use the default text/label columns")
    df = pd.read_parquet(path)
    if "text" not in df.columns or "label" not in df.columns:
        raise DataFormatError(f"{path}: parquet snapshot needs 'text' and 'label' columns")
    rows: list[Record] = []
    for index, (text, label) in enumerate(zip(df["text"], df["label"]), 1):
        if label not in (0, 1):
            raise DataFormatError(f"{path}:{index}: label must be 0 or 1, got {label!r}")
        rows.append(Record(text=safe_text(text), label=bool(int(label))))
    return rows


def load_records(path: Path | str, *, columns: Mapping[str, int] = DEFAULT_COLUMNS) -> list[Record]:
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Dataset not found: {path}")
    if path.suffix == ".parquet":
        rows = _from_parquet(path, columns)
        logger.info("Loaded %d records from %s", len(rows), path)
        return rows

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DataFormatError(f"{path}: not valid UTF-8 ({exc})") from exc

    rows = []
    for number, raw in enumerate(content.splitlines(), 1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        rows.append(parse_line(line, columns=columns, where=f"{path}:{number}"))
    logger.info("Loaded %d records from %s", len(rows), path)
    return rows


def records_to_frame(records: Sequence[Record]) -> pd.DataFrame:
    frame = pd.DataFrame([asdict(record) for record in records], columns=["text", "label"])
    frame["text"] = frame["text"].astype(str)
    frame["label"] = frame["label"].astype(int)
    return frame


def split_records(
    records: Sequence[Record],
    *,
    test_fraction: float = 0.2,
    seed: int = 42,
) -> tuple[list[Record], list[Record]]:
    if not 0.0 < float(test_fraction) < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")
    rows = list(records)
    if len(rows) < 2:
        return rows, []
    n_test = min(max(math.ceil(test_fraction * len(rows)), 1), len(rows) - 1)
    train_idx, test_idx = train_test_split(
        list(range(len(rows))),
        test_size=n_test,
        random_state=seed,
        shuffle=True,
    )
    train = [rows[index] for index in train_idx]
    test = [rows[index] for index in test_idx]
    logger.debug("Split %d records into %d train / %d test", len(rows), len(train), len(test))
    return train, test


def export_splits(train: Sequence[Record], test: Sequence[Record], directory: Path | str) -> dict[str, Path]:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    train_path = directory / TRAIN_SNAPSHOT
    eval_path = directory / EVAL_SNAPSHOT
    records_to_frame(train).to_parquet(train_path, index=False)
    records_to_frame(test).to_parquet(eval_path, index=False)
    logger.info("Exported split snapshots to %s", directory)
    return {"train_dataset": train_path, "eval_dataset": eval_path}

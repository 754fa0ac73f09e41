# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import pandas as pd
import pytest

from sentimentai.errors import DataFormatError, NotFoundError
from sentimentai.schemas import Record
from sentimentai.training.dataset import (
    export_splits,
    load_records,
    parse_line,
    records_to_frame,
    split_records,
)

SCENARIO = ["great food\t1", "terrible service\t0", "loved it\t1", "hated it\t0"]


def test_load_records_reads_text_and_label(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("Wow... Loved this place.\t1\nCrust is not good.\t0\n\n", encoding="utf-8")

    rows = load_records(path)

    assert rows == [Record("Wow... Loved this place.", True), Record("Crust is not good.", False)]


def test_load_records_accepts_windows_line_endings(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"nice\t1\r\nmeh\t0\r\n")

    assert [row.label for row in load_records(path)] == [True, False]


@pytest.mark.parametrize(
    "line",
    ["no label here", "too\tmany\tfields", "bad label\t2", "yes\ttrue", "empty label\t"],
)
def test_parse_line_rejects_malformed_rows(line):
    with pytest.raises(DataFormatError):
        parse_line(line)


def test_load_records_reports_line_number(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("fine\t1\nbroken line\n", encoding="utf-8")

    with pytest.raises(DataFormatError, match=r"data.txt:2"):
        load_records(path)


def test_load_records_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "data.txt"
    path.write_bytes(b"caf\xe9\t1\n")

    with pytest.raises(DataFormatError):
        load_records(path)


def test_load_records_missing_file(tmp_path):
    with pytest.raises(NotFoundError):
        load_records(tmp_path / "missing.txt")


def test_custom_column_mapping():
    record = parse_line("1\tswapped columns", columns={"label": 0, "text": 1})

    assert record == Record("swapped columns", True)


def test_records_to_frame_uses_int_labels(records):
    frame = records_to_frame(records)

    assert list(frame.columns) == ["text", "label"]
    assert set(frame["label"].unique()) == {0, 1}
    assert len(frame) == len(records)


def test_split_is_disjoint_and_sized(records):
    train, test = split_records(records, test_fraction=0.2, seed=7)

    assert len(test) == 8
    assert len(train) == len(records) - 8
    assert set(train).isdisjoint(test)
    assert set(train) | set(test) == set(records)


def test_split_is_seeded(records):
    assert split_records(records, seed=3) == split_records(records, seed=3)


def test_split_scenario_four_rows(tmp_path):
    path = tmp_path / "tiny.txt"
    path.write_text("\n".join(SCENARIO) + "\n", encoding="utf-8")
    rows = load_records(path)

    train, test = split_records(rows, test_fraction=0.25)

    assert len(test) == 1
    assert len(train) == 3


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.1, 1.5])
def test_split_rejects_out_of_range_fraction(records, fraction):
    with pytest.raises(ValueError):
        split_records(records, test_fraction=fraction)


def test_split_single_record_goes_to_train():
    rows = [Record("only one", True)]

    assert split_records(rows) == (rows, [])


def test_export_splits_round_trips_through_parquet(tmp_path, records):
    train, test = split_records(records, seed=1)

    paths = export_splits(train, test, tmp_path / "snapshots")

    assert load_records(paths["train_dataset"]) == train
    assert load_records(paths["eval_dataset"]) == test


def test_parquet_missing_text_becomes_empty(tmp_path):
    path = tmp_path / "snapshot.parquet"
    pd.DataFrame({"text": ["fine", None], "label": [1, 0]}).to_parquet(path, index=False)

    assert load_records(path) == [Record("fine", True), Record("", False)]


def test_parquet_rejects_custom_column_mapping(tmp_path, records):
    paths = export_splits(records[:4], records[4:6], tmp_path)

    with pytest.raises(ValueError):
        load_records(paths["train_dataset"], columns={"label": 0, "text": 1})

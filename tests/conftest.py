# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

import pytest

from sentimentai.config import Settings
from sentimentai.schemas import Record
from sentimentai.training.trainer import train_model

POSITIVE = [
    "great food and great service",
    "the food was great",
    "great place, loved it",
    "loved the pasta, great value",
    "amazing staff and great atmosphere",
    "this place is great",
    "great restaurant with friendly staff",
    "really good and tasty dishes",
    "the burger was great and fresh",
    "great experience, will come back",
    "friendly waiter and great dessert",
    "delicious food, great prices",
    "we loved this great little spot",
    "great coffee and good vibes",
    "excellent, great and fast",
    "the steak was great",
    "awesome pizza, great crust",
    "great, great, great",
    "nice people and great music",
    "good portions and great taste",
]

NEGATIVE = [
    "bad food and bad service",
    "the food was bad",
    "bad place, hated it",
    "hated the pasta, bad value",
    "rude staff and bad atmosphere",
    "this place is bad",
    "bad restaurant with rude staff",
    "really awful and bland dishes",
    "the burger was bad and cold",
    "bad experience, never coming back",
    "rude waiter and bad dessert",
    "terrible food, bad prices",
    "we hated this bad little spot",
    "bad coffee and awful vibes",
    "terrible, bad and slow",
    "the steak was bad",
    "soggy pizza, bad crust",
    "bad, bad, bad",
    "mean people and bad music",
    "small portions and bad taste",
]


def corpus_records() -> list[Record]:
    rows = [Record(text=text, label=True) for text in POSITIVE]
    rows += [Record(text=text, label=False) for text in NEGATIVE]
    return rows


def write_dataset(path: Path, records: list[Record]) -> Path:
    lines = [f"{record.text}\t{1 if record.label else 0}" for record in records]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def records() -> list[Record]:
    return corpus_records()


@pytest.fixture
def dataset_path(tmp_path: Path, records: list[Record]) -> Path:
    return write_dataset(tmp_path / "reviews.txt", records)


@pytest.fixture
def settings(tmp_path: Path, dataset_path: Path) -> Settings:
    return Settings(
        data_path=dataset_path,
        model_path=tmp_path / "model.zip",
        word_max_features=5000,
        char_max_features=5000,
    )


@pytest.fixture(scope="session")
def trained_model():
    return train_model(corpus_records(), settings=Settings(word_max_features=5000, char_max_features=5000))

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import numpy as np
import pytest

from sentimentai.config import Settings
from sentimentai.errors import TrainingError
from sentimentai.inference.predictor import predict
from sentimentai.schemas import Record
from sentimentai.training.dataset import split_records
from sentimentai.training.trainer import train_model

PROBES = ["great lunch", "bad lunch", "the staff", "unknown words entirely"]


def test_train_records_metadata(trained_model, records):
    metadata = trained_model.metadata

    assert metadata["train_rows"] == len(records)
    assert metadata["labels_positive"] == 20
    assert metadata["labels_negative"] == 20
    assert metadata["n_features"] == trained_model.n_features == trained_model.featurizer_dimension


def test_training_is_deterministic(records):
    settings = Settings(seed=11, word_max_features=5000, char_max_features=5000)
    first = train_model(records, settings=settings)
    second = train_model(records, settings=settings)

    first_scores, first_probs = first.score(PROBES)
    second_scores, second_probs = second.score(PROBES)

    np.testing.assert_array_equal(first_scores, second_scores)
    np.testing.assert_array_equal(first_probs, second_probs)


def test_empty_training_set():
    with pytest.raises(TrainingError):
        train_model([])


@pytest.mark.parametrize("label", [True, False])
def test_single_class_training_set(label):
    rows = [Record("great food", label), Record("loved it", label), Record("fine", label)]

    with pytest.raises(TrainingError):
        train_model(rows)


def test_training_set_without_features():
    rows = [Record("", True), Record("", False)]

    with pytest.raises(TrainingError):
        train_model(rows)


def test_four_row_scenario_predictions():
    rows = [
        Record("great food", True),
        Record("terrible service", False),
        Record("loved it", True),
        Record("hated it", False),
    ]
    train, test = split_records(rows, test_fraction=0.25)
    assert len(train) == 3
    assert len(test) == 1

    model = train_model(train)
    good = predict(model, "this is a great restaurant")
    bad = predict(model, "this is a bad restaurant")

    assert model.metadata["calibration"] == "logistic"
    assert good.predicted_label is True
    assert good.probability > 0.5
    assert bad.predicted_label is False
    assert bad.probability < 0.5


def test_larger_training_set_uses_sigmoid_calibration(trained_model):
    assert trained_model.metadata["calibration"] == "sigmoid"

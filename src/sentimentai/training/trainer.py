# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

import joblib
import pandas as pd
import sklearn
from sklearn.calibration import CalibratedClassifierCV
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import StratifiedKFold
from sklearn.pipeline import Pipeline

from ..config import Settings
from ..errors import TrainingError
from ..features import FEATURE_COLUMNS, build_featurizer
from ..model import ARTIFACT_FORMAT, ARTIFACT_FORMAT_VERSION, CLASSIFIER_STEP, FEATURIZER_STEP, SentimentModel
from ..schemas import DEFAULT_COLUMNS, Record
from .dataset import records_to_frame

logger = logging.getLogger(__name__)


def _timestamp_key() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _calibration_splits(y: pd.Series, *, folds: int) -> int:
    return min(max(folds, 2), int(y.value_counts().min()))


def _build_classifier(settings: Settings, y: pd.Series) -> LogisticRegression | CalibratedClassifierCV:
    base = LogisticRegression(
        solver="liblinear",
        max_iter=settings.max_iter,
        class_weight="balanced",
        random_state=settings.seed,
    )
    n_splits = _calibration_splits(y, folds=settings.calibration_folds)
    if n_splits < 2:
        # A one-example class leaves no held-out scores for a Platt fit;
        # the regression's own logistic link maps scores to probabilities.
        return base
    return CalibratedClassifierCV(
        estimator=base,
        method="sigmoid",
        cv=StratifiedKFold(n_splits=n_splits, shuffle=True, random_state=settings.seed),
        ensemble=False,
    )


def _build_model(settings: Settings, y: pd.Series) -> Pipeline:
    return Pipeline(
        steps=[
            (FEATURIZER_STEP, build_featurizer(settings)),
            (CLASSIFIER_STEP, _build_classifier(settings, y)),
        ]
    )


def _check_training_set(frame: pd.DataFrame) -> None:
    if frame.empty:
        raise TrainingError("Training set is empty")
    classes = set(frame["label"].unique().tolist())
    if classes != {0, 1}:
        present = "positive" if classes == {1} else "negative"
        raise TrainingError(f"Training set only contains {present} labels ({len(frame)} rows)")


def train_model(records: Sequence[Record], *, settings: Settings | None = None) -> SentimentModel:
    settings = settings or Settings()
    frame = records_to_frame(records)
    _check_training_set(frame)

    x_train = frame[FEATURE_COLUMNS]
    y_train = frame["label"]
    pipeline = _build_model(settings, y_train)
    logger.info("Fitting model on %d rows (seed=%d)", len(frame), settings.seed)
    try:
        pipeline.fit(x_train, y_train)
    except ValueError as exc:
        if "empty vocabulary" in str(exc):
            raise TrainingError(f"Training text yields no features: {exc}") from exc
        raise

    positives = int(y_train.sum())
    metadata = {
        "format": ARTIFACT_FORMAT,
        "format_version": ARTIFACT_FORMAT_VERSION,
        "model_version": _timestamp_key(),
        "created_at_utc": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "columns": dict(DEFAULT_COLUMNS),
        "features": list(FEATURE_COLUMNS),
        "seed": int(settings.seed),
        "calibration": "sigmoid" if isinstance(pipeline.named_steps[CLASSIFIER_STEP], CalibratedClassifierCV) else "logistic",
        "train_rows": int(len(frame)),
        "labels_positive": positives,
        "labels_negative": int(len(frame) - positives),
        "sklearn_version": sklearn.__version__,
        "joblib_version": joblib.__version__,
    }
    model = SentimentModel(pipeline=pipeline, metadata=metadata)
    metadata["n_features"] = model.n_features
    if metadata["n_features"] != model.featurizer_dimension:
        raise TrainingError(
            f"Classifier expects {model.n_features} features but featurizer yields {model.featurizer_dimension}"
        )
    return SentimentModel(pipeline=pipeline, metadata=metadata)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Sequence

from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
)

from ..model import SentimentModel
from ..schemas import Metrics, Record
from ..store import load_model
from ..training.dataset import load_records

logger = logging.getLogger(__name__)


def _safe_auc(y_true: list[int], y_prob: list[float]) -> float:
    if len(set(y_true)) < 2:
        logger.warning("AUC is undefined: test set holds a single class (%d rows)", len(y_true))
        return math.nan
    return float(roc_auc_score(y_true, y_prob))


def _metrics(y_true: list[int], y_prob: list[float], threshold: float = 0.5) -> Metrics:
    y_pred = [1 if score >= threshold else 0 for score in y_prob]
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    return Metrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        auc=_safe_auc(y_true, y_prob),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        tn=int(tn),
        fp=int(fp),
        fn=int(fn),
        tp=int(tp),
        rows=len(y_true),
    )


def evaluate(model: SentimentModel, records: Sequence[Record], *, threshold: float = 0.5) -> Metrics:
    if not records:
        logger.warning("Evaluation skipped: test set is empty")
        return Metrics(accuracy=math.nan, auc=math.nan, f1=math.nan)
    y_true = [int(record.label) for record in records]
    _scores, probs = model.score(record.text for record in records)
    return _metrics(y_true, probs.tolist(), threshold=threshold)


def threshold_report(model: SentimentModel, records: Sequence[Record]) -> list[dict[str, float]]:
    if not records:
        return []
    y_true = [int(record.label) for record in records]
    _scores, probs = model.score(record.text for record in records)
    report: list[dict[str, float]] = []
    for raw in range(5, 96, 5):
        thr = raw / 100.0
        y_pred = [1 if score >= thr else 0 for score in probs.tolist()]
        report.append(
            {
                "threshold": float(thr),
                "precision": float(precision_score(y_true, y_pred, zero_division=0)),
                "recall": float(recall_score(y_true, y_pred, zero_division=0)),
                "f1": float(f1_score(y_true, y_pred, zero_division=0)),
            }
        )
    return report


def evaluate_saved_model(*, model_path: Path, dataset_path: Path) -> tuple[Metrics, list[dict[str, float]]]:
    """Load an artifact and a dataset; return its metrics and the threshold sweep."""
    model = load_model(model_path)
    records = load_records(dataset_path)
    return evaluate(model, records), threshold_report(model, records)

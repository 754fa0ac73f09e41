# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .config import Settings
from .console import MLConsole
from .evaluation.evaluate import evaluate
from .features import top_tokens
from .inference.predictor import predict_many
from .model import SentimentModel
from .schemas import Metrics, Prediction
from .store import load_model, save_model
from .training.dataset import export_splits, load_records, split_records
from .training.trainer import train_model

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES = ("this is a great restaurant", "this is a bad restaurant")


@dataclass
class RunResult:
    model: SentimentModel
    trained: bool
    metrics: Metrics | None = None
    predictions: list[Prediction] = field(default_factory=list)


def report_metrics(metrics: Metrics, *, console: MLConsole) -> None:
    console.metrics_table(metrics.headline(), title=f"Evaluation ({metrics.rows} rows)")
    if metrics.rows == 0:
        console.warn("Test set is empty, metrics are undefined")
    elif math.isnan(metrics.auc):
        console.warn("Test set holds a single class, AUC is undefined")


def train_evaluate_save(
    settings: Settings,
    *,
    console: MLConsole,
    export_dir: Path | None = None,
) -> tuple[SentimentModel, Metrics]:
    console.info(f"Loading {settings.data_path}...")
    records = load_records(settings.data_path)
    train, test = split_records(records, test_fraction=settings.test_fraction, seed=settings.seed)
    if export_dir is not None:
        export_splits(train, test, export_dir)

    console.info(f"Training model on {len(train)} rows...")
    model = train_model(train, settings=settings)

    metrics = evaluate(model, test)
    report_metrics(metrics, console=console)

    console.info("Saving model to disk...")
    save_model(model, settings.model_path, archive_dir=settings.archive_dir)
    return model, metrics


def run(
    settings: Settings,
    *,
    console: MLConsole,
    samples: Sequence[str] = DEFAULT_SAMPLES,
    export_dir: Path | None = None,
) -> RunResult:
    metrics: Metrics | None = None
    trained = False
    if settings.model_path.exists() and not settings.force_retrain:
        console.info("Loading model from disk...")
        model = load_model(settings.model_path)
    else:
        if settings.force_retrain and settings.model_path.exists():
            logger.info("Retraining over existing model %s", settings.model_path)
        model, metrics = train_evaluate_save(settings, console=console, export_dir=export_dir)
        trained = True

    predictions = predict_many(model, samples)
    for text, prediction in zip(samples, predictions):
        console.prediction(text, prediction.probability)
        logger.debug("%r -> score=%.4f tokens=%s", text, prediction.score, top_tokens(text, max_items=4))
    return RunResult(model=model, trained=trained, metrics=metrics, predictions=predictions)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Review sentiment AI package."""

from .errors import CorruptArtifactError, DataFormatError, NotFoundError, SentimentAIError, TrainingError
from .inference.predictor import SentimentPredictor, load_predictor, predict, predict_many
from .model import SentimentModel
from .schemas import Metrics, Prediction, Record
from .store import load_model, save_model

__all__ = [
    "Record",
    "Prediction",
    "Metrics",
    "SentimentModel",
    "SentimentPredictor",
    "load_predictor",
    "predict",
    "predict_many",
    "load_model",
    "save_model",
    "SentimentAIError",
    "DataFormatError",
    "TrainingError",
    "CorruptArtifactError",
    "NotFoundError",
]

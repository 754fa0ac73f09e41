# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..config import load_settings
from ..model import SentimentModel
from ..schemas import Prediction
from ..store import load_model

THRESHOLD = 0.5


def predict_many(model: SentimentModel, texts: Iterable[str]) -> list[Prediction]:
    scores, probs = model.score(texts)
    return [
        Prediction(predicted_label=bool(prob >= THRESHOLD), probability=float(prob), score=float(score))
        for score, prob in zip(scores.tolist(), probs.tolist())
    ]


def predict(model: SentimentModel, text: str) -> Prediction:
    return predict_many(model, [text])[0]


class SentimentPredictor:
    def __init__(self, *, model_path: Path) -> None:
        self.model_path = Path(model_path)
        self._model: SentimentModel | None = None

    @classmethod
    def from_model(cls, model: SentimentModel, *, model_path: Path | None = None) -> "SentimentPredictor":
        predictor = cls(model_path=model_path or Path("<memory>"))
        predictor._model = model
        return predictor

    @property
    def model(self) -> SentimentModel:
        if self._model is None:
            self._model = load_model(self.model_path)
        return self._model

    @property
    def model_version(self) -> str:
        return self.model.model_version

    def predict(self, text: str) -> Prediction:
        return predict(self.model, text)

    def predict_many(self, texts: Iterable[str]) -> list[Prediction]:
        return predict_many(self.model, texts)


_CACHE: SentimentPredictor | None = None


def load_predictor() -> SentimentPredictor:
    global _CACHE
    if _CACHE is not None:
        return _CACHE
    _CACHE = SentimentPredictor(model_path=load_settings().model_path)
    return _CACHE

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import numpy as np
from sklearn.pipeline import Pipeline

from .features import feature_dimension, text_frame

FEATURIZER_STEP = "featurizer"
CLASSIFIER_STEP = "clf"
POSITIVE_CLASS = 1
ARTIFACT_FORMAT = "sentimentai-model"
ARTIFACT_FORMAT_VERSION = 1


@dataclass(frozen=True)
class SentimentModel:
    """Fitted featurizer, linear classifier and sigmoid calibrator as one unit.

    The wrapped pipeline is never refitted or mutated after construction;
    scoring only goes through :meth:`score`.
    """

    pipeline: Pipeline
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def model_version(self) -> str:
        return str(self.metadata.get("model_version") or "unknown")

    def _linear(self):
        classifier = self.pipeline.named_steps[CLASSIFIER_STEP]
        calibrated = getattr(classifier, "calibrated_classifiers_", None)
        return calibrated[0].estimator if calibrated else classifier

    @property
    def n_features(self) -> int:
        """Length of the classifier weight vector."""
        return int(self._linear().coef_.shape[1])

    @property
    def featurizer_dimension(self) -> int:
        return feature_dimension(self.pipeline.named_steps[FEATURIZER_STEP])

    def score(self, texts: Iterable[str]) -> tuple[np.ndarray, np.ndarray]:
        """Return raw decision scores and calibrated positive-class probabilities."""
        frame = text_frame(texts)
        if frame.empty:
            return np.zeros(0, dtype=float), np.zeros(0, dtype=float)
        features = self.pipeline.named_steps[FEATURIZER_STEP].transform(frame)
        classifier = self.pipeline.named_steps[CLASSIFIER_STEP]
        scores = np.asarray(self._linear().decision_function(features), dtype=float)
        positive = list(classifier.classes_).index(POSITIVE_CLASS)
        probs = np.asarray(classifier.predict_proba(features)[:, positive], dtype=float)
        return scores, np.clip(probs, 0.0, 1.0)

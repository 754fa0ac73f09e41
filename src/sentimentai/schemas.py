# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_COLUMNS: dict[str, int] = {"text": 0, "label": 1}


@dataclass(frozen=True, slots=True)
class Record:
    text: str
    label: bool


@dataclass(frozen=True, slots=True)
class Prediction:
    predicted_label: bool
    probability: float
    score: float


@dataclass(frozen=True, slots=True)
class Metrics:
    accuracy: float
    auc: float
    f1: float
    precision: float = math.nan
    recall: float = math.nan
    tn: int = 0
    fp: int = 0
    fn: int = 0
    tp: int = 0
    rows: int = 0

    def headline(self) -> dict[str, float]:
        return {
            "Accuracy": self.accuracy,
            "Area Under Roc Curve": self.auc,
            "F1 Score": self.f1,
        }

    def as_dict(self) -> dict[str, float]:
        return {
            "accuracy": float(self.accuracy),
            "auc": float(self.auc),
            "f1": float(self.f1),
            "precision": float(self.precision),
            "recall": float(self.recall),
            "tn": float(self.tn),
            "fp": float(self.fp),
            "fn": float(self.fn),
            "tp": float(self.tp),
            "rows": float(self.rows),
        }

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .env import get_bool_env, get_env, get_float_env, get_int_env

DEFAULT_DATA_PATH = "yelp_labelled.txt"
DEFAULT_MODEL_PATH = "model.zip"


@dataclass(frozen=True, slots=True)
class Settings:
    data_path: Path = Path(DEFAULT_DATA_PATH)
    model_path: Path = Path(DEFAULT_MODEL_PATH)
    test_fraction: float = 0.2
    seed: int = 42
    calibration_folds: int = 3
    max_iter: int = 500
    word_max_features: int = 60000
    char_max_features: int = 40000
    min_df: int = 1
    force_retrain: bool = False
    archive_dir: Path | None = None
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy where every non-None override replaces the current value."""
        values = {key: value for key, value in overrides.items() if value is not None}
        for key in ("data_path", "model_path", "archive_dir"):
            if key in values:
                values[key] = Path(values[key])
        return replace(self, **values)


def load_settings() -> Settings:
    archive_raw = get_env("SENTIMENT_ARCHIVE_DIR")
    return Settings(
        data_path=Path(get_env("SENTIMENT_DATA_PATH", DEFAULT_DATA_PATH) or DEFAULT_DATA_PATH),
        model_path=Path(get_env("SENTIMENT_MODEL_PATH", DEFAULT_MODEL_PATH) or DEFAULT_MODEL_PATH),
        test_fraction=get_float_env("SENTIMENT_TEST_FRACTION", 0.2),
        seed=get_int_env("SENTIMENT_SEED", 42),
        calibration_folds=max(get_int_env("SENTIMENT_CALIBRATION_FOLDS", 3), 2),
        max_iter=max(get_int_env("SENTIMENT_MAX_ITER", 500), 1),
        word_max_features=max(get_int_env("SENTIMENT_WORD_MAX_FEATURES", 60000), 1),
        char_max_features=max(get_int_env("SENTIMENT_CHAR_MAX_FEATURES", 40000), 1),
        min_df=max(get_int_env("SENTIMENT_MIN_DF", 1), 1),
        force_retrain=get_bool_env("SENTIMENT_FORCE_RETRAIN", False),
        archive_dir=Path(archive_raw) if archive_raw else None,
        log_level=(get_env("SENTIMENT_LOG_LEVEL", "INFO") or "INFO").upper(),
    )

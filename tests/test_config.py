# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

from sentimentai.config import Settings, load_settings
from sentimentai.env import get_bool_env, get_float_env, get_int_env


def test_defaults(monkeypatch):
    for name in ("SENTIMENT_DATA_PATH", "SENTIMENT_MODEL_PATH", "SENTIMENT_TEST_FRACTION", "SENTIMENT_ARCHIVE_DIR"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.data_path == Path("yelp_labelled.txt")
    assert settings.model_path == Path("model.zip")
    assert settings.test_fraction == 0.2
    assert settings.archive_dir is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SENTIMENT_TEST_FRACTION", "0.3")
    monkeypatch.setenv("SENTIMENT_SEED", "7")
    monkeypatch.setenv("SENTIMENT_FORCE_RETRAIN", "yes")
    monkeypatch.setenv("SENTIMENT_ARCHIVE_DIR", "/tmp/archive")
    monkeypatch.setenv("SENTIMENT_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.test_fraction == 0.3
    assert settings.seed == 7
    assert settings.force_retrain is True
    assert settings.archive_dir == Path("/tmp/archive")
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SENTIMENT_INT", "seven")
    monkeypatch.setenv("SENTIMENT_FLOAT", "nan")
    monkeypatch.setenv("SENTIMENT_BOOL", "maybe")

    assert get_int_env("SENTIMENT_INT", 3) == 3
    assert get_float_env("SENTIMENT_FLOAT", 0.5) == 0.5
    assert get_bool_env("SENTIMENT_BOOL", True) is True


def test_with_overrides_skips_none():
    settings = Settings().with_overrides(model_path="other.zip", seed=None)

    assert settings.model_path == Path("other.zip")
    assert settings.seed == 42

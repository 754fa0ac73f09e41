# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations


class SentimentAIError(Exception):
    """Base class for every failure raised by the package."""


class DataFormatError(SentimentAIError):
    """A dataset row cannot be parsed into a record."""


class TrainingError(SentimentAIError):
    """The training set is empty, single-class or yields no features."""


class CorruptArtifactError(SentimentAIError):
    """A model artifact exists but cannot be read back."""


class NotFoundError(SentimentAIError, FileNotFoundError):
    """A dataset or model artifact path does not exist."""

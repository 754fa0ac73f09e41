# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import re
import unicodedata
from collections import Counter
from typing import Iterable

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import TfidfVectorizer

from .config import Settings

TEXT_COLUMN = "text"
FEATURE_COLUMNS = [TEXT_COLUMN]

WHITESPACE_RE = re.compile(r"\s+")
TOKEN_RE = re.compile(r"[a-z0-9à-öø-ÿ_'-]{3,40}", flags=re.IGNORECASE)
STOPWORDS = {"the", "and", "this", "that", "was", "were", "for", "with", "are", "but", "have", "had", "not"}
WORD_RE = re.compile(r"[a-z']+")

POSITIVE_WORDS = {
    "amazing",
    "awesome",
    "best",
    "delicious",
    "excellent",
    "fantastic",
    "fresh",
    "friendly",
    "good",
    "great",
    "love",
    "loved",
    "lovely",
    "nice",
    "perfect",
    "recommend",
    "tasty",
    "wonderful",
}

NEGATIVE_WORDS = {
    "awful",
    "bad",
    "bland",
    "cold",
    "disappointed",
    "disappointing",
    "dirty",
    "disgusting",
    "hate",
    "hated",
    "horrible",
    "mediocre",
    "poor",
    "rude",
    "slow",
    "soggy",
    "terrible",
    "worst",
}

LEXICON_FEATURES = ["positive_hits", "negative_hits"]


def safe_text(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    return str(value)


def normalize_text(value: object) -> str:
    text = unicodedata.normalize("NFKC", safe_text(value)).lower()
    return WHITESPACE_RE.sub(" ", text).strip()


def lexicon_hits(text: object) -> tuple[int, int]:
    words = WORD_RE.findall(normalize_text(text))
    positive = sum(1 for word in words if word in POSITIVE_WORDS)
    negative = sum(1 for word in words if word in NEGATIVE_WORDS)
    return positive, negative


class LexiconCounter(BaseEstimator, TransformerMixin):
    """Counts of opinion words from the positive and negative lexicons."""

    def fit(self, X, y=None):
        return self

    def transform(self, X):
        return np.array([lexicon_hits(text) for text in X], dtype=float).reshape(-1, len(LEXICON_FEATURES))

    def get_feature_names_out(self, input_features=None):
        return np.asarray(LEXICON_FEATURES, dtype=object)


def build_featurizer(settings: Settings | None = None) -> ColumnTransformer:
    settings = settings or Settings()
    return ColumnTransformer(
        transformers=[
            (
                "word_tfidf",
                TfidfVectorizer(
                    analyzer="word",
                    preprocessor=normalize_text,
                    ngram_range=(1, 2),
                    max_features=settings.word_max_features,
                    min_df=settings.min_df,
                    sublinear_tf=True,
                ),
                TEXT_COLUMN,
            ),
            (
                "char_tfidf",
                TfidfVectorizer(
                    analyzer="char_wb",
                    preprocessor=normalize_text,
                    ngram_range=(3, 5),
                    max_features=settings.char_max_features,
                    min_df=settings.min_df,
                    sublinear_tf=True,
                ),
                TEXT_COLUMN,
            ),
            ("lexicon", LexiconCounter(), TEXT_COLUMN),
        ],
        sparse_threshold=1.0,
    )


def text_frame(texts: Iterable[object]) -> pd.DataFrame:
    return pd.DataFrame({TEXT_COLUMN: [safe_text(text) for text in texts]})


def feature_dimension(featurizer: ColumnTransformer) -> int:
    return int(len(featurizer.get_feature_names_out()))


def top_tokens(text: str, max_items: int = 5) -> list[str]:
    tokens = [
        match.group(0)
        for match in TOKEN_RE.finditer(normalize_text(text))
        if match.group(0) not in STOPWORDS
    ]
    if not tokens:
        return []
    freq = Counter(tokens)
    return [token for token, _count in freq.most_common(max_items)]

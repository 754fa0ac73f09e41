# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""
Model persistence.

A model artifact is a single zip file holding the joblib-serialized
pipeline (``model.joblib``) and its schema (``metadata.json``).
"""

from __future__ import annotations

import io
import json
import logging
import shutil
import zipfile
from datetime import datetime, timezone
from pathlib import Path

import joblib
from sklearn.pipeline import Pipeline

from .errors import CorruptArtifactError, NotFoundError
from .model import ARTIFACT_FORMAT, SentimentModel

logger = logging.getLogger(__name__)

MODEL_MEMBER = "model.joblib"
METADATA_MEMBER = "metadata.json"


def save_model(model: SentimentModel, path: Path | str, *, archive_dir: Path | str | None = None) -> Path:
    """
    Write ``model`` to ``path`` as one artifact.

    Args:
        model: Fitted model to persist
        path: Destination file, parent directories are created
        archive_dir: When set, a timestamped copy is kept under this directory

    Returns:
        Path of the written artifact
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = io.BytesIO()
    joblib.dump(model.pipeline, payload)
    metadata = dict(model.metadata)
    metadata.setdefault("n_features", model.n_features)

    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(MODEL_MEMBER, payload.getvalue())
        archive.writestr(METADATA_MEMBER, json.dumps(metadata, ensure_ascii=False, indent=2) + "\n")
    logger.info("Model saved to %s", path)

    if archive_dir is not None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        target = Path(archive_dir) / stamp
        target.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target / path.name)
        logger.info("Model archived to %s", target / path.name)

    return path


def _read_members(path: Path) -> tuple[bytes, bytes]:
    try:
        with zipfile.ZipFile(path, "r") as archive:
            names = set(archive.namelist())
            for member in (MODEL_MEMBER, METADATA_MEMBER):
                if member not in names:
                    raise CorruptArtifactError(f"{path}: missing {member}")
            return archive.read(MODEL_MEMBER), archive.read(METADATA_MEMBER)
    except zipfile.BadZipFile as exc:
        raise CorruptArtifactError(f"{path}: not a model archive ({exc})") from exc


def load_model(path: Path | str) -> SentimentModel:
    """
    Restore a model written by :func:`save_model`.

    Raises:
        NotFoundError: ``path`` does not exist
        CorruptArtifactError: the file is not a readable model artifact
    """
    path = Path(path)
    if not path.exists():
        raise NotFoundError(f"Model not found: {path}")

    raw_model, raw_metadata = _read_members(path)

    try:
        metadata = json.loads(raw_metadata.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptArtifactError(f"{path}: invalid {METADATA_MEMBER} ({exc})") from exc
    if not isinstance(metadata, dict) or metadata.get("format") != ARTIFACT_FORMAT:
        raise CorruptArtifactError(f"{path}: unexpected artifact format")

    try:
        pipeline = joblib.load(io.BytesIO(raw_model))
    except Exception as exc:
        raise CorruptArtifactError(f"{path}: cannot deserialize {MODEL_MEMBER} ({exc})") from exc
    if not isinstance(pipeline, Pipeline):
        raise CorruptArtifactError(f"{path}: {MODEL_MEMBER} holds {type(pipeline).__name__}, not a Pipeline")

    model = SentimentModel(pipeline=pipeline, metadata=metadata)
    try:
        n_features = model.n_features
        dimension = model.featurizer_dimension
        expected = int(metadata.get("n_features", n_features))
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
        raise CorruptArtifactError(f"{path}: pipeline is not a fitted sentiment model ({exc})") from exc
    if not n_features == dimension == expected:
        raise CorruptArtifactError(
            f"{path}: feature dimension mismatch (metadata={expected}, classifier={n_features}, featurizer={dimension})"
        )

    logger.info("Model loaded from %s", path)
    return model

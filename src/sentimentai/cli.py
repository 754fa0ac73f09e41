# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.logging import RichHandler

from .config import Settings, load_settings
from .console import MLConsole
from .evaluation.evaluate import evaluate_saved_model
from .features import top_tokens
from .inference.predictor import predict_many
from .pipeline import DEFAULT_SAMPLES, report_metrics, run
from .store import load_model

COMMANDS = ("run", "evaluate", "predict")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--quiet", action="store_true", help="Disable console output")
    common.add_argument("--log-level", default=None, help="Logging level (default: SENTIMENT_LOG_LEVEL or INFO)")

    parser = argparse.ArgumentParser(prog="sentimentai", description="Train, evaluate and query a review sentiment model.")
    sub = parser.add_subparsers(dest="command", required=True)

    run_parser = sub.add_parser("run", parents=[common], help="Load the model if present, otherwise train it, then score samples")
    run_parser.add_argument("--data", type=Path, default=None, help="Tab-separated dataset (text, 0/1 label)")
    run_parser.add_argument("--model", type=Path, default=None, help="Model artifact path")
    run_parser.add_argument("--test-fraction", type=float, default=None, help="Held-out fraction for evaluation")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed for split and training")
    run_parser.add_argument("--retrain", action="store_true", help="Train even if the model artifact exists")
    run_parser.add_argument("--export-splits", type=Path, default=None, help="Directory for parquet split snapshots")
    run_parser.add_argument("texts", nargs="*", help="Texts to score (default: two sample reviews)")

    eval_parser = sub.add_parser("evaluate", parents=[common], help="Evaluate a saved model on a dataset")
    eval_parser.add_argument("--model", type=Path, default=None, help="Model artifact path")
    eval_parser.add_argument("--data", type=Path, default=None, help="Dataset (.txt or .parquet)")
    eval_parser.add_argument("--metrics", type=Path, default=None, help="Write the metrics as JSON here")
    eval_parser.add_argument("--thresholds", type=Path, default=None, help="Write a threshold sweep JSON report here")

    predict_parser = sub.add_parser("predict", parents=[common], help="Score texts with a saved model")
    predict_parser.add_argument("--model", type=Path, default=None, help="Model artifact path")
    predict_parser.add_argument("texts", nargs="+", help="Texts to score")
    return parser


def _with_default_command(argv: Sequence[str]) -> list[str]:
    items = list(argv)
    if items and (items[0] in COMMANDS or items[0] in ("-h", "--help")):
        return items
    return ["run", *items]


def _cmd_run(args: argparse.Namespace, settings: Settings, console: MLConsole) -> int:
    settings = settings.with_overrides(
        data_path=args.data,
        model_path=args.model,
        test_fraction=args.test_fraction,
        seed=args.seed,
        force_retrain=True if args.retrain else None,
    )
    console.banner()
    samples = tuple(args.texts) if args.texts else DEFAULT_SAMPLES
    run(settings, console=console, samples=samples, export_dir=args.export_splits)
    return 0


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")


def _cmd_evaluate(args: argparse.Namespace, settings: Settings, console: MLConsole) -> int:
    settings = settings.with_overrides(data_path=args.data, model_path=args.model)
    console.info("Loading model from disk...")
    metrics, report = evaluate_saved_model(model_path=settings.model_path, dataset_path=settings.data_path)
    report_metrics(metrics, console=console)
    if args.metrics is not None:
        _write_json(args.metrics, metrics.as_dict())
        console.success(f"metrics: {args.metrics}")
    if args.thresholds is not None:
        _write_json(args.thresholds, report)
        console.success(f"report: {args.thresholds}")
    return 0


def _cmd_predict(args: argparse.Namespace, settings: Settings, console: MLConsole) -> int:
    settings = settings.with_overrides(model_path=args.model)
    model = load_model(settings.model_path)
    predictions = predict_many(model, args.texts)
    rows = [
        (text, prediction.predicted_label, prediction.probability, prediction.score, top_tokens(text, max_items=4))
        for text, prediction in zip(args.texts, predictions)
    ]
    console.predictions_table(rows, title=f"Predictions (model {model.model_version})")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_with_default_command(sys.argv[1:] if argv is None else argv))
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)
    console = MLConsole(enabled=not args.quiet)

    if args.command == "evaluate":
        return _cmd_evaluate(args, settings, console)
    if args.command == "predict":
        return _cmd_predict(args, settings, console)
    return _cmd_run(args, settings, console)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

ASCII_BANNER = r"""
  ___          _   _                  _
 / __| ___ _ _| |_(_)_ __  ___ _ _  | |_
 \__ \/ -_) ' \  _| | '  \/ -_) ' \ |  _|
 |___/\___|_||_\__|_|_|_|_\___|_||_| \__|
"""


def format_percent(value: float) -> str:
    if value is None or math.isnan(float(value)):
        return "n/a"
    return f"{float(value):.0%}"


@dataclass
class MLConsole:
    enabled: bool = True

    def __post_init__(self) -> None:
        self._console = Console(color_system="auto", soft_wrap=True, quiet=not self.enabled)

    def banner(self) -> None:
        self._console.print(Panel.fit(ASCII_BANNER.strip("\n"), title="Sentiment ML", border_style="cyan"))

    def info(self, text: str) -> None:
        self._console.print(f"[bold cyan]INFO[/bold cyan] {text}")

    def warn(self, text: str) -> None:
        self._console.print(f"[bold yellow]WARN[/bold yellow] {text}")

    def success(self, text: str) -> None:
        self._console.print(f"[bold green]OK[/bold green] {text}")

    def metrics_table(self, metrics: dict[str, float], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        for key, value in metrics.items():
            table.add_row(key, format_percent(value))
        self._console.print(table)

    def prediction(self, text: str, probability: float) -> None:
        self._console.print(f"{text} ({format_percent(probability)})", markup=False, highlight=False)

    def predictions_table(self, rows: list[tuple[str, bool, float, float, list[str]]], *, title: str) -> None:
        table = Table(title=title, show_lines=True)
        table.add_column("Text")
        table.add_column("Label", justify="center")
        table.add_column("Probability", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Tokens")
        for text, label, probability, score, tokens in rows:
            table.add_row(
                text,
                "[green]positive[/green]" if label else "[red]negative[/red]",
                format_percent(probability),
                f"{score:+.3f}",
                ", ".join(tokens),
            )
        self._console.print(table)

"""Reporting helpers."""

from .summary import build_suggestion_report

__all__ = ["build_suggestion_report"]

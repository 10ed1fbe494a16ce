"""Spending Dashboard: bank CSV normalization and spending metrics."""

__version__ = "0.1.0"

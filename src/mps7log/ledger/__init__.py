"""Folds decoded MPS7 records into balances and totals."""

from .Aggregator import Aggregator

__all__ = ["Aggregator"]

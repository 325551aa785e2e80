"""Concurrent curve construction for whole beatmaps."""

from slidercurve.batch.builder import BatchResult, CurveBatchBuilder

__all__ = ["BatchResult", "CurveBatchBuilder"]

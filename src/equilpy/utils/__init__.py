"""Utility modules of equilpy: common types and logging."""

"""Ibadah tracker: daily worship habit tracking bot and statistics engine."""

__version__ = "1.0.0"

"""Learnlog: a personal learning diary with undoable deletes and cached search."""

__version__ = "0.1.0"

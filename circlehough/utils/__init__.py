"""Logging, I/O, metrics and debugging helpers."""

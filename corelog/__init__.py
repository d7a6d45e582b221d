"""Structured logging cores, a tee, write syncers, an in-memory observer and logging adapters."""

__version__ = "0.1.0"
"""Batch swap jobs against an ACP marketplace agent."""

__version__ = "0.1.0"

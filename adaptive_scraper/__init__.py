"""Adaptive web content retrieval and extraction service."""
__version__ = "0.1.0"

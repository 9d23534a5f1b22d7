"""Stockbook inventory and order-tracking dashboard service."""

__version__ = "1.0.0"

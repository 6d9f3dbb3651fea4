"""Deployment and verification tooling for the Splitter payment-splitter contract."""

__version__ = "0.1.0"

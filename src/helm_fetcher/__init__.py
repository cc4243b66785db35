"""Helm Fetcher - resolve, download and verify Helm charts."""

__version__ = "0.1.0"

"""Zep: incremental crawl-and-index engine for a curated site directory."""

__version__ = "0.1.0"

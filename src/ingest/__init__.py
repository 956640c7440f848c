"""Crawler payload ingestion.

This module parses crawler JSONL output into typed records for the
table storage layer.
"""

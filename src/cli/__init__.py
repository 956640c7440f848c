"""Crawlstore command line interface."""

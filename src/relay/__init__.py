"""Image relay layer.

This module fetches crawled images over HTTP and stores them in S3.
"""

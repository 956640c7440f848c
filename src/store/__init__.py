"""Table storage layer.

This module encodes crawler records into DynamoDB attribute values
and writes them with single puts or bounded batches.
"""

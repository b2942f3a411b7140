"""
Package: utils
Description: Shared helpers for the webhook sender.

Current utilities:
- logger: Structured logging configuration and helpers
- metrics: CloudWatch delivery metrics
"""

__all__ = []

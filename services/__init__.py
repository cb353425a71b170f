"""
Services
========

Services:
- regulations: EPA regulation details and search
"""

__all__ = [
    "regulations",
]

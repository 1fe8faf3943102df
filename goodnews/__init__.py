"""
Good News - positive news finder

Retrieves news articles for a country and time window, scores each
article's tone, and surfaces only the ones judged positive.
"""

__version__ = "0.1.0"

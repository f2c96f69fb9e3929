"""
Domain layer package.

Contains pure data models and derivation logic with no I/O dependencies.
"""

"""
Interface layer package.

Command-line front end.
"""

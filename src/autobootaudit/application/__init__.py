"""
Application layer package.

Use cases that orchestrate domain logic and infrastructure collaborators.
"""

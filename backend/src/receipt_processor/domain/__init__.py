"""
Domain package - Core business logic with no external dependencies.

This package contains pure Python domain models, validation checks and
scoring rules that turn a submitted receipt into a reward-points total.
"""

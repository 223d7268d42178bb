"""
Top-level package for the portfolio admin dashboard.

This package exposes the admin table architecture (engine, collections, UI adapters).
Most code should import from submodules such as:
    portfolio_admin.core
    portfolio_admin.collections
    portfolio_admin.ui
"""

__all__: list[str] = []

"""
UI layer: Dash layout builders, callback registration and the app factory.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]

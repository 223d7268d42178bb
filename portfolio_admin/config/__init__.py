"""
Config package for portfolio_admin.

Responsible for:
- config models (GlobalConfig, CollectionConfig)
- config I/O helpers (load_global_config)
"""

from .model import GlobalConfig, CollectionConfig
from .loader import load_global_config

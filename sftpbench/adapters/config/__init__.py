"""
Configuration adapters
"""
from .loader import ConfigLoader

__all__ = ["ConfigLoader"]

"""
Configuration module for the Text Analyzer backend
"""
from .settings import Config, config

__all__ = ["Config", "config"]

"""Configuration module."""
from .settings import Config

__all__ = ['Config']

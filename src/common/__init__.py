"""Common - Shared functionality across Blog Builder components."""

from . import base
from . import config

__all__ = ["base", "config"]

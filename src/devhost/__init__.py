"""
devhost - Serve local web projects at a friendly hostname
"""

__version__ = "0.1.0"

from .core import DevHost
from .errors import DevhostError

__all__ = ["DevHost", "DevhostError"]

"""
Remote service clients
"""
from .dokuweb import DokuwebClient

__all__ = [
    "DokuwebClient",
]

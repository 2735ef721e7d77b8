"""
Reverse lookup backends for ptrsweep
"""

from .base import BaseLookup, LookupFailed
from .dnspython_lookup import DNSPythonLookup

__all__ = ['BaseLookup', 'LookupFailed', 'DNSPythonLookup']

"""
ptrsweep - Bulk Reverse DNS Resolver

Concurrent PTR lookups for large lists of IP addresses and CIDR ranges,
with resolver failover, retries and rate limiting.
"""

__version__ = "1.0.0"
__author__ = "ptrsweep"

"""
ptrsweep - Bulk Reverse DNS Resolver

Entry point for running as a module:
    python -m ptrsweep -l ips.txt -U
"""

from .cli import main

if __name__ == '__main__':
    main()

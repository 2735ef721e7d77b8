"""
Output modules for ptrsweep
"""

from .console import ConsoleOutput
from .sink import OutputSink

__all__ = ['ConsoleOutput', 'OutputSink']

"""
pv-like - Version Information
"""

__version__ = "1.1"
__description__ = "Line-by-line pipe viewer with rate limiting"

PROG_NAME = "pv-like"

"""
Core relay modules
"""
from .state import TransferState
from .sources import (
    InputSource, FileSource, StreamSource, iter_lines,
    SourceError, SourceOpenError, SourceReadError
)
from .relay import LineRelay

__all__ = [
    'TransferState',
    'InputSource', 'FileSource', 'StreamSource', 'iter_lines',
    'SourceError', 'SourceOpenError', 'SourceReadError',
    'LineRelay'
]

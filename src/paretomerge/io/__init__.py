"""
Readers and writers for result files and objective listings.
"""

from .objectives import objectives_matrix, read_objectives, write_objectives
from .result_file import ResultEntry, ResultFileReader, ResultFileWriter

__all__ = [
    "ResultEntry",
    "ResultFileReader",
    "ResultFileWriter",
    "objectives_matrix",
    "read_objectives",
    "write_objectives",
]

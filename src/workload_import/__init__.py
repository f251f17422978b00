"""
Workload Import: bulk CSV import pipeline for academic workload records.

This package parses delimited files of lecturers, modules and module
iterations, infers a column-to-field mapping, validates every record and
hands a fully valid batch to an external bulk-write collaborator.
"""

from importlib.metadata import version

__version__ = version("workload-import")

__all__ = ["__version__"]

"""
miniprof-import - miniprofiler export to trace file converter
"""

__version__ = "0.1.0"

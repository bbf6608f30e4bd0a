"""Local single-user task tracker: write-through task store, filtered/sorted views, console UI."""

__version__ = "0.1.0"

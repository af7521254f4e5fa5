"""Use-case layer for orchestrating detection workflows.

Each module coordinates domain objects and ports without performing process
I/O directly, preserving MVVM + Hexagonal boundaries.
"""

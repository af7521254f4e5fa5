"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (adb process bridge,
    adb path lookup, settings persistence, and test doubles) used by use
    cases and the monitor.

Dependencies:
    Individual submodules depend on ``subprocess``, filesystem APIs, and
    domain protocol definitions.

Call context:
    Imported by app composition modules (for runtime wiring) and by tests (for
    mocks and process-level behavior verification).
"""

"""ViewModel package for monitor state and settings.

Call context:
    ``nowactivity/app/main.py`` and ``nowactivity/web_ui`` import concrete
    viewmodels from this package to turn monitor snapshots into display text.

Dependencies:
    Modules in this package depend on domain types and formatting helpers
    only. Process I/O and persistence remain in adapters and use cases.
"""

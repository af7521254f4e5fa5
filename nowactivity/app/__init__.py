"""Application composition layer.

Modules here own the polling worker and wire adapters, use cases and view
models into the console watcher and the web panel.
"""

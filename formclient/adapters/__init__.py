"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete ``TransportPort`` implementations (HTTP and an offline
    test double) used by forms.

Dependencies:
    ``transport_rest`` depends on ``requests``; ``transport_mock`` is pure
    Python.

Call context:
    Imported by app composition code (for runtime wiring) and by tests (for
    mocks and transport-level behavior verification).
"""

"""Use-case layer for form submission workflows.

Modules here translate transport outcomes into form state without performing
transport I/O directly.
"""

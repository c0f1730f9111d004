"""
Core domain models, numerical primitives, and error contract.

Engine is pure in-process computation: no I/O, no shared state.
"""

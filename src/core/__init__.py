"""
Core domain models, integer math primitives, and contracts.

This module contains the foundational building blocks of the pool that are
independent of the host environment (state store, asset ledgers, transport).
"""

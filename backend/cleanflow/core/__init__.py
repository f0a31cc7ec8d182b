"""Core Layer — contracts, result types, errors and response policy. No IO.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Everything defined here is immutable or stateless

Design Decisions:
    - Contracts as Protocols: pluggable stages satisfy them structurally
"""

"""cleanflow — layered HTTP request pipeline: decode, execute, present.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports from submodules, no star exports
"""

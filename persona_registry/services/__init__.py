"""Services Layer — IO-bound orchestration around the pure core.

Invariants:
    - Services own database access; core stays pure
    - Repositories receive their session explicitly (no ambient globals)
"""

"""
Storefront Core Primitives — Reusable Building Blocks
======================================================
Primitives are the shared, engine-agnostic building blocks that
the storefront engines consume. They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Deterministic (same input → same output)

Primitives:
    catalog     — Product, variant and cart line snapshots
"""

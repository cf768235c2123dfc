"""Storefront Application Package — users, products and transactional order placement.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

"""
Order services package.

Validation, name resolution, pricing and the OrderManager orchestrator that
keeps the in-memory order cache consistent with the store.
"""

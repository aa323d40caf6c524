"""Services Layer — list records, versions, article rows, and the facade composing them.

Invariants:
    - All statements go through Repository._execute (StoreError mapping)
    - Cache invalidation happens after the commit it belongs to
"""

"""listkeep — versioned hierarchical article-list store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Entry point is services.list_facade.ListFacade; everything else is imported explicitly
"""

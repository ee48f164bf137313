"""
BlogNest Backend — Application Package
========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │      Client (presentation layer)    │  ← httpx API client, blog cards
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns, envelopes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, lifecycle rules
    ├─────────────────────────────────────┤
    │     Stores (Credential / Blog)      │  ← queries, linked transactions
    ├─────────────────────────────────────┤
    │     Document store (Persistence)    │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

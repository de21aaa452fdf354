"""
Campus Market Backend: Application Package
============================================

What:  Informational backend for the campus market (announcements, discounted
       products, polls, business hours, scoreboard and image uploads).
How:   Each resource lives in a pretty-printed JSON document under DATA_DIR.
       A single generic ResourceStore handles load / append / delete / replace
       for every resource kind.

Architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ranking, voting, uploads
    ├─────────────────────────────────────┤
    │        Schemas (API contracts)      │  ← Pydantic, camelCase on the wire
    ├─────────────────────────────────────┤
    │   ResourceStore (JSON persistence)  │  ← one document per resource kind
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

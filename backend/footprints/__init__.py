"""
Footprints Backend — Application Package
=========================================

What: The travel-journal API: trips, their photos and their visibility.
Who:  Imported by uvicorn (`footprints.main:app`), Alembic and pytest.

Layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← trips, photos, signed URLs
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database / Object Store clients   │  ← injected per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

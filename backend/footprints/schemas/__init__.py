# Schemas package init
"""
Footprints Backend — Request/Response Schemas
==============================================

    - trip.py:   trip bodies and records (PascalCase wire names), errors, health
    - photo.py:  signed upload / read URL batches (camelCase wire names)
"""

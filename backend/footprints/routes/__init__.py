# Routes package init
"""
Footprints Backend — API Routes Package
========================================

What:  HTTP route handlers, one per trip or photo operation.

Route Inventory:
    - trips.py:   POST   /Trips              (create or overwrite a trip)
                  GET    /Trips?userId=      (owner's trips)
                  GET    /Trips/{id}?userId= (one trip, all photos signed)
                  PUT    /Trips              (change visibility)
                  DELETE /Trips              (delete a trip)
                  GET    /public-trips       (everyone's public trips)
    - photos.py:  POST   /upload             (signed upload URLs)
                  POST   /image-urls         (signed read URLs)
    - health.py:  GET    /health             (service health check)

Routes stay thin: read params and body, call one service method, return.
"""

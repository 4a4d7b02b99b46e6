# Services package init
"""
Footprints Backend — Services Layer
====================================

What:  Business rules between the routes (HTTP) and the trip table / bucket.
How:   Stateless service objects receive their session and storage client
       per call; routes get those through FastAPI dependencies.

Service Inventory:
    - image_keys:      pure helpers (key normalization, content types, upload keys)
    - StorageService:  boto3 client, signed GET/PUT URLs, bucket probe
    - TripService:     trip CRUD and cover/detail photo resolution
    - PhotoService:    batch upload slots and batch read URL resolution
"""

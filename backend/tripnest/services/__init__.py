# Services package init
"""
TripNest Backend — Services Layer
===================================

What:  Persistence adapter sitting between routes (HTTP) and the document store.

Service Inventory:
    - TouristSpotService: one collection call per API operation, typed errors
      for bad requests, missing documents and store failures.
"""

# Routes package init
"""
TripNest Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - welcome.py:        GET  /                       (plain-text greeting)
    - tourist_spots.py:  GET  /tourist-spot           (list)
                         GET  /tourist-spot/{id}      (detail)
                         POST /tourist-spot           (create)
                         PUT  /tourist-spot/{id}      (partial update)
                         DELETE /tourist-spot/{id}    (delete)
                         GET  /my-list/{email}        (spots owned by an email)
    - health.py:         GET  /health                 (store ping)

Design Principle:
    Routes are THIN: they extract parameters, call TouristSpotService once,
    and return its result. Status codes for failures are chosen by the
    exception handlers in main.py, not here.
"""

"""
TripNest Backend — Application Package Initializer
===================================================

What: Marks the `tripnest` directory as a Python package.
Who:  Imported by uvicorn (`tripnest.main:app`), the `tripnest` console script, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Persistence Adapter)  │  ← One store call per operation
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Documents + acknowledgments
    ├─────────────────────────────────────┤
    │        Database (MongoStore)        │  ← Async pymongo client handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

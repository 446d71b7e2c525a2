"""
Service layer.

Each service encapsulates the business rules of one area (crowd
levels, locations, check-ins, reviews, favorites, users) on top of an
injected ``EntityStore``.  ``storage.CrowdStorage`` composes them into
the single facade consumed by the API handlers.
"""

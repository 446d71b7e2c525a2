"""
Core infrastructure: settings, logging, exceptions and the entity store.
"""

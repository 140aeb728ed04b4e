"""
Event Blog API.

CRUD over users, events, stocks, products and categories stored in MongoDB, with
lazily provisioned collections and cascading deletes across collections.
"""

__version__ = "1.0.0"

"""
Domain layer - Core business entities and domain logic.

This layer contains the fundamental business objects and rules,
independent of storage or presentation concerns.
"""

"""
Resolver services for turning display names into store IDs.
"""

from .entity_resolver import EntityResolver

__all__ = ["EntityResolver"]

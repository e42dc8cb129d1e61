"""
Feed generation core module.
"""

from .models import CatalogItem, CatalogImage, CatalogVariant, FeedConfig
from .sanitize import clean_description, split_tags
from .xml_writer import generate_rss, create_item, FeedGenerationError

__all__ = [
    'CatalogItem',
    'CatalogImage',
    'CatalogVariant',
    'FeedConfig',
    'clean_description',
    'split_tags',
    'generate_rss',
    'create_item',
    'FeedGenerationError'
]

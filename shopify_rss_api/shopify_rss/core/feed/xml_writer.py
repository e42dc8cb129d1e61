"""
XML Writer for the RSS 2.0 product feed (with Media RSS and Dublin Core extensions).
"""

import logging
import xml.etree.ElementTree as ET
from xml.dom import minidom
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import List, Optional

from shopify_rss.config import DEFAULT_FEED_TITLE, DEFAULT_FEED_DESCRIPTION, DEFAULT_FEED_LANGUAGE
from .models import CatalogItem, FeedConfig
from .sanitize import clean_description, split_tags


logger = logging.getLogger(__name__)

MEDIA_NS = 'http://search.yahoo.com/mrss/'
DC_NS = 'http://purl.org/dc/elements/1.1/'

DEFAULT_FEED_LINK = 'https://shop.myshopify.com'
GENERATOR = 'Simple Shopify RSS Generator'
PRICE_CURRENCY = 'TRY'
IMAGE_MIME_TYPE = 'image/jpeg'


class FeedGenerationError(Exception):
    """Raised when the feed document cannot be assembled."""
    pass


def format_rfc1123(value: datetime) -> str:
    """Format a datetime as an RFC-1123 GMT string, e.g. 'Mon, 02 Oct 2023 10:00:00 GMT'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _item_link(base_url: str, handle: str) -> str:
    return f"{base_url}/products/{handle}"


def create_item(parent: ET.Element, item: CatalogItem, config: FeedConfig) -> ET.Element:
    """
    Append one <item> element for a catalog item.

    Args:
        parent: The <channel> element
        item: Catalog item to render
        config: Channel settings (link and title are used)

    Returns:
        The created <item> element
    """
    base_url = config.link or DEFAULT_FEED_LINK
    link = _item_link(base_url, item.handle)

    elem = ET.SubElement(parent, 'item')
    ET.SubElement(elem, 'title').text = item.title
    ET.SubElement(elem, 'description').text = clean_description(item.description_html)
    ET.SubElement(elem, 'link').text = link
    ET.SubElement(elem, 'guid', {'isPermaLink': 'true'}).text = link
    ET.SubElement(elem, 'pubDate').text = format_rfc1123(item.updated_at)
    ET.SubElement(elem, 'dc:creator').text = config.title or DEFAULT_FEED_TITLE

    if item.images:
        for image in item.images:
            ET.SubElement(elem, 'media:content', {
                'url': image.url,
                'type': IMAGE_MIME_TYPE,
                'medium': 'image',
            })
        ET.SubElement(elem, 'media:thumbnail', {'url': item.images[0].url})

    # Only the first variant is priced
    if item.variants:
        ET.SubElement(elem, 'media:price', {'currency': PRICE_CURRENCY}).text = item.variants[0].price

    if item.product_type:
        ET.SubElement(elem, 'category').text = item.product_type

    for tag in split_tags(item.tags):
        ET.SubElement(elem, 'dc:subject').text = tag

    return elem


def generate_rss(
    items: List[CatalogItem],
    config: FeedConfig,
    now: Optional[datetime] = None
) -> str:
    """
    Generate the RSS 2.0 feed document for a list of catalog items.

    Every input item yields exactly one <item>, in input order.

    Args:
        items: Catalog items
        config: Channel settings; empty fields fall back to defaults
        now: Build instant for <lastBuildDate> (defaults to current UTC time)

    Returns:
        Pretty-printed XML string with declaration

    Raises:
        FeedGenerationError: If any part of the document cannot be built
    """
    try:
        rss = ET.Element('rss', {
            'version': '2.0',
            'xmlns:media': MEDIA_NS,
            'xmlns:dc': DC_NS,
        })

        channel = ET.SubElement(rss, 'channel')
        ET.SubElement(channel, 'title').text = config.title or DEFAULT_FEED_TITLE
        ET.SubElement(channel, 'description').text = config.description or DEFAULT_FEED_DESCRIPTION
        ET.SubElement(channel, 'link').text = config.link or DEFAULT_FEED_LINK
        ET.SubElement(channel, 'language').text = config.language or DEFAULT_FEED_LANGUAGE
        ET.SubElement(channel, 'lastBuildDate').text = format_rfc1123(now or datetime.now(timezone.utc))
        ET.SubElement(channel, 'generator').text = GENERATOR

        for item in items:
            create_item(channel, item, config)

        xml_string = ET.tostring(rss, encoding='unicode', method='xml')

        # Re-parse for pretty printing; this also rejects characters XML cannot carry
        dom = minidom.parseString(xml_string)
        pretty_xml = dom.toprettyxml(indent='  ', encoding='UTF-8').decode('utf-8')
    except Exception as e:
        logger.error("Failed to build RSS XML: %s", e)
        raise FeedGenerationError(f"Failed to build RSS XML: {e}") from e

    logger.debug("Built RSS feed with %d items", len(items))
    return pretty_xml

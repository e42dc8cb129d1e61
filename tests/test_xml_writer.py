import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest

from shopify_rss.core.feed import (
    CatalogImage,
    CatalogItem,
    CatalogVariant,
    FeedConfig,
    FeedGenerationError,
    generate_rss,
)
from shopify_rss.core.feed.xml_writer import format_rfc1123


MEDIA = "{http://search.yahoo.com/mrss/}"
DC = "{http://purl.org/dc/elements/1.1/}"

CONFIG = FeedConfig(
    title="Test Store",
    description="Everything we sell",
    link="https://test-shop.myshopify.com",
    language="en",
)


def _item(handle="item", **kwargs):
    defaults = dict(
        title=handle.title(),
        handle=handle,
        updated_at=datetime(2023, 10, 2, 10, 30, tzinfo=timezone.utc),
    )
    defaults.update(kwargs)
    return CatalogItem(**defaults)


def _parse(xml):
    return ET.fromstring(xml.encode("utf-8"))


def _items(root):
    return root.find("channel").findall("item")


def test_root_declares_namespaces_and_version():
    xml = generate_rss([], CONFIG)
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'xmlns:media="http://search.yahoo.com/mrss/"' in xml
    assert 'xmlns:dc="http://purl.org/dc/elements/1.1/"' in xml
    root = _parse(xml)
    assert root.tag == "rss"
    assert root.get("version") == "2.0"


def test_channel_fields_from_config():
    now = datetime(2024, 1, 5, 8, 0, tzinfo=timezone.utc)
    channel = _parse(generate_rss([], CONFIG, now=now)).find("channel")
    assert channel.findtext("title") == "Test Store"
    assert channel.findtext("description") == "Everything we sell"
    assert channel.findtext("link") == "https://test-shop.myshopify.com"
    assert channel.findtext("language") == "en"
    assert channel.findtext("lastBuildDate") == "Fri, 05 Jan 2024 08:00:00 GMT"
    assert channel.findtext("generator") == "Simple Shopify RSS Generator"


def test_channel_defaults_for_empty_config():
    channel = _parse(generate_rss([], FeedConfig())).find("channel")
    assert channel.findtext("title") == "Store Products"
    assert channel.findtext("description") == "All products in our store"
    assert channel.findtext("link") == "https://shop.myshopify.com"
    assert channel.findtext("language") == "tr"


def test_one_item_per_input_in_order():
    handles = ["c", "a", "b", "a"]
    root = _parse(generate_rss([_item(h) for h in handles], CONFIG))
    links = [item.findtext("link") for item in _items(root)]
    assert links == [f"https://test-shop.myshopify.com/products/{h}" for h in handles]


def test_item_core_fields():
    item = _item(
        "linen-shirt",
        title="Linen Shirt",
        description_html="<p>Soft &amp; light</p>",
        updated_at=datetime(2023, 10, 2, 13, 30, tzinfo=timezone.utc),
    )
    elem = _items(_parse(generate_rss([item], CONFIG)))[0]
    url = "https://test-shop.myshopify.com/products/linen-shirt"
    assert elem.findtext("title") == "Linen Shirt"
    assert elem.findtext("description") == "Soft & light"
    assert elem.findtext("link") == url
    assert elem.find("guid").text == url
    assert elem.find("guid").get("isPermaLink") == "true"
    assert elem.findtext("pubDate") == "Mon, 02 Oct 2023 13:30:00 GMT"
    assert elem.findtext(f"{DC}creator") == "Test Store"


def test_creator_falls_back_to_default_title():
    elem = _items(_parse(generate_rss([_item()], FeedConfig())))[0]
    assert elem.findtext(f"{DC}creator") == "Store Products"
    assert elem.findtext("link") == "https://shop.myshopify.com/products/item"


def test_missing_description_renders_empty():
    elem = _items(_parse(generate_rss([_item()], CONFIG)))[0]
    assert (elem.findtext("description") or "") == ""


def test_no_images_omits_media_content_and_thumbnail():
    elem = _items(_parse(generate_rss([_item()], CONFIG)))[0]
    assert elem.findall(f"{MEDIA}content") == []
    assert elem.find(f"{MEDIA}thumbnail") is None


def test_single_image_emits_content_and_thumbnail_with_same_url():
    item = _item(images=[CatalogImage(url="https://cdn.example.com/a.jpg")])
    elem = _items(_parse(generate_rss([item], CONFIG)))[0]
    contents = elem.findall(f"{MEDIA}content")
    assert len(contents) == 1
    assert contents[0].get("url") == "https://cdn.example.com/a.jpg"
    assert contents[0].get("type") == "image/jpeg"
    assert contents[0].get("medium") == "image"
    assert elem.find(f"{MEDIA}thumbnail").get("url") == "https://cdn.example.com/a.jpg"


def test_multiple_images_thumbnail_uses_first():
    urls = ["https://cdn.example.com/1.jpg", "https://cdn.example.com/2.jpg"]
    item = _item(images=[CatalogImage(url=u) for u in urls])
    elem = _items(_parse(generate_rss([item], CONFIG)))[0]
    assert [c.get("url") for c in elem.findall(f"{MEDIA}content")] == urls
    assert elem.find(f"{MEDIA}thumbnail").get("url") == urls[0]


def test_price_uses_first_variant_only():
    item = _item(variants=[CatalogVariant(price="10.00"), CatalogVariant(price="20.00")])
    elem = _items(_parse(generate_rss([item], CONFIG)))[0]
    prices = elem.findall(f"{MEDIA}price")
    assert len(prices) == 1
    assert prices[0].text == "10.00"
    assert prices[0].get("currency") == "TRY"


def test_no_variants_omits_price():
    elem = _items(_parse(generate_rss([_item()], CONFIG)))[0]
    assert elem.find(f"{MEDIA}price") is None


def test_category_and_subjects():
    item = _item(product_type="Shirts", tags="a, b ,c")
    elem = _items(_parse(generate_rss([item], CONFIG)))[0]
    assert elem.findtext("category") == "Shirts"
    assert [s.text for s in elem.findall(f"{DC}subject")] == ["a", "b", "c"]


def test_no_product_type_or_tags_omits_fields():
    elem = _items(_parse(generate_rss([_item()], CONFIG)))[0]
    assert elem.find("category") is None
    assert elem.findall(f"{DC}subject") == []


def test_text_is_escaped():
    item = _item(title="Salt & Pepper <Set>")
    xml = generate_rss([item], CONFIG)
    assert "Salt &amp; Pepper &lt;Set&gt;" in xml
    assert _items(_parse(xml))[0].findtext("title") == "Salt & Pepper <Set>"


def test_unencodable_text_raises_generation_error():
    item = _item(title="bad \x00 title")
    with pytest.raises(FeedGenerationError):
        generate_rss([item], CONFIG)


def test_format_rfc1123_converts_to_gmt():
    from datetime import timedelta

    value = datetime(2023, 10, 2, 13, 30, tzinfo=timezone(timedelta(hours=3)))
    assert format_rfc1123(value) == "Mon, 02 Oct 2023 10:30:00 GMT"

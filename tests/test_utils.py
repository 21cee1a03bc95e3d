from __future__ import annotations

from medium_import.utils import filename_from_url, sanitize_filename, slugify, upgrade_image_url


def test_upgrade_image_url_rewrites_size_segment() -> None:
    url = "https://cdn-images-1.medium.com/max/800/1*abc.png"
    assert upgrade_image_url(url) == "https://cdn-images-1.medium.com/max/2000/1*abc.png"


def test_upgrade_image_url_is_idempotent() -> None:
    url = "https://cdn-images-1.medium.com/max/1024/0*xyz.jpeg"
    once = upgrade_image_url(url)
    assert upgrade_image_url(once) == once


def test_upgrade_image_url_leaves_other_urls_alone() -> None:
    url = "https://example.com/images/maximum/photo.png"
    assert upgrade_image_url(url) == url
    assert upgrade_image_url("https://example.com/max/big/a.png") == "https://example.com/max/big/a.png"


def test_upgrade_image_url_custom_width() -> None:
    assert upgrade_image_url("https://x.test/max/800/a.png", 1600) == "https://x.test/max/1600/a.png"


def test_sanitize_filename() -> None:
    assert sanitize_filename("1*Ab c%20d.png") == "1_Ab_c_20d.png"
    assert sanitize_filename("ok-name_1.jpg") == "ok-name_1.jpg"
    assert sanitize_filename("") == "image"


def test_filename_from_url_ignores_query() -> None:
    url = "https://cdn-images-1.medium.com/max/2000/1*lead.png?q=20"
    assert filename_from_url(url) == "1_lead.png"


def test_slugify() -> None:
    assert slugify("My Title: Part 2!") == "my-title-part-2"
    assert slugify("¡¡!!") == "post"

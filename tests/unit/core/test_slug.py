"""Unit tests for slug generation."""

import pytest

from src.catalog.core.services.slug import slugify


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Red Running Shoes", "red-running-shoes"),
            ("  Padded   Jacket  ", "padded-jacket"),
            ("Café au Lait", "cafe-au-lait"),
            ("50% Off: Socks (3-pack)!", "50-off-socks-3-pack"),
            ("snake_case_name", "snake-case-name"),
            ("already-a-slug", "already-a-slug"),
        ],
    )
    def test_slugify(self, name: str, expected: str):
        assert slugify(name) == expected

    def test_slugify_is_deterministic(self):
        assert slugify("Wool Beanie") == slugify("Wool Beanie")

    def test_slugify_is_idempotent(self):
        slug = slugify("Éclair Box -- Deluxe Edition")
        assert slugify(slug) == slug

    def test_slugify_output_is_url_safe(self):
        slug = slugify("Tea & Biscuits / Gift Set #2")
        assert slug == "tea-biscuits-gift-set-2"
        assert all(ch.isalnum() or ch == "-" for ch in slug)

"""
Tests for the template helpers.
"""

import pytest

from giftcard_web.utils.templating import details_url, templates


class TestDetailsUrl:

    @pytest.mark.parametrize("gift_card_id,url", [
        ("3f2b8c1e", "/gift-cards/3f2b8c1e"),
        ("gift/card 1", "/gift-cards/gift%2Fcard%201"),
        ("a?b#c", "/gift-cards/a%3Fb%23c"),
    ])
    def test_id_is_one_path_segment(self, gift_card_id, url):
        assert details_url(gift_card_id) == url

    def test_available_in_templates(self):
        rendered = templates.env.from_string("{{ details_url(card_id) }}").render(card_id="x/y")
        assert rendered == "/gift-cards/x%2Fy"

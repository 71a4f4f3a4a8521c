"""Tests for the content-service image lookup."""

import httpx
import pytest

from storefront.domain.exceptions import TransportError
from storefront.domain.model.catalog import ImageAsset
from storefront.infrastructure.content.payload_client import PayloadContentClient


def _client(handler) -> PayloadContentClient:
    return PayloadContentClient(
        "https://cms.example.com/", "checkout-hero", transport=httpx.MockTransport(handler)
    )


def _page(*blocks) -> dict:
    return {"docs": [{"slug": "checkout-hero", "layout": list(blocks)}]}


class TestPayloadContentClient:

    def test_first_image_of_image_block(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=_page(
                    {"blockType": "richText", "content": []},
                    {
                        "blockType": "imageLinks",
                        "images": [
                            {"url": "https://cdn.example.com/hero.jpg", "alt": "Juice"},
                            {"url": "https://cdn.example.com/other.jpg"},
                        ],
                    },
                ),
            )

        image = _client(handler).get_checkout_image()

        assert image == ImageAsset("https://cdn.example.com/hero.jpg", "Juice")
        request = seen[0]
        assert request.url.path == "/api/pages"
        assert request.url.params["where[slug][equals]"] == "checkout-hero"
        assert request.url.params["depth"] == "2"

    def test_no_page(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"docs": []})

        assert _client(handler).get_checkout_image() is None

    def test_no_image_block(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_page({"blockType": "richText"}))

        assert _client(handler).get_checkout_image() is None

    def test_error_status_is_no_image(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="oops")

        assert _client(handler).get_checkout_image() is None

    def test_unreadable_body_is_no_image(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        assert _client(handler).get_checkout_image() is None

    def test_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            _client(handler).get_checkout_image()

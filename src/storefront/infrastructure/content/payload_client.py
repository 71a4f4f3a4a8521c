"""Content-service client for the image shown beside the checkout.

The page is looked up by slug; the first image of its first ``imageLinks``
block is used. Anything missing yields None so the checkout renders
without an image.
"""

from __future__ import annotations

import logging

import httpx
import pydantic
from pydantic import BaseModel, ConfigDict

from storefront.domain.exceptions import TransportError
from storefront.domain.gateway.content_gateway import ContentGateway
from storefront.domain.model.catalog import ImageAsset

logger = logging.getLogger(__name__)

IMAGE_BLOCK_TYPE = "imageLinks"


class _Image(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    alt: str | None = None


class _Block(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    block_type: str | None = pydantic.Field(default=None, alias="blockType")
    images: list[_Image] = []


class _Page(BaseModel):
    model_config = ConfigDict(extra="ignore")

    layout: list[_Block] = []


class _PageList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    docs: list[_Page] = []


class PayloadContentClient(ContentGateway):

    def __init__(
        self,
        base_url: str,
        slug: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._slug = slug
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def get_checkout_image(self) -> ImageAsset | None:
        try:
            response = self._http.get(
                f"{self._base_url}/api/pages",
                params={"where[slug][equals]": self._slug, "depth": 2},
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"Content service unreachable: {exc}") from exc

        if not response.is_success:
            logger.info("Content service returned HTTP %s", response.status_code)
            return None

        try:
            pages = _PageList.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as exc:
            logger.warning("Unreadable content service response: %s", exc)
            return None
        return _first_image(pages)

    def close(self) -> None:
        self._http.close()


def _first_image(pages: _PageList) -> ImageAsset | None:
    if not pages.docs:
        return None
    block = next(
        (b for b in pages.docs[0].layout if b.block_type == IMAGE_BLOCK_TYPE), None
    )
    if block is None or not block.images:
        return None
    image = block.images[0]
    if not image.url:
        return None
    return ImageAsset(url=image.url, alt=image.alt or "")


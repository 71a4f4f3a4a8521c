"""Port for the content/asset service (display only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import ImageAsset


class ContentGateway(ABC):

    @abstractmethod
    def get_checkout_image(self) -> ImageAsset | None:
        """Return the image shown beside the checkout, or None."""

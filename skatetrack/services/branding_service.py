"""Branding service: load, validate and save dashboard branding."""

import logging
import re
from dataclasses import replace
from typing import Optional

from ..models import BrandingSettings
from ..utils import BRAND_COLOR_KEY, BRAND_NAME_KEY, LOGO_URL_KEY
from .persistence_service import InMemoryKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class BrandingValidationError(ValueError):
    """Raised when a branding change is rejected."""
    pass


class BrandingService:
    """
    Holds the current branding and writes it through to a key-value store.

    Every successful change writes all three keys back, matching how the
    dashboard saved its settings to local storage.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.settings = BrandingSettings()

    def load(self) -> BrandingSettings:
        """Read stored preferences; absent or empty values keep their defaults."""
        defaults = BrandingSettings()
        self.settings = BrandingSettings(
            brand_name=self.store.get_item(BRAND_NAME_KEY) or defaults.brand_name,
            brand_color=self.store.get_item(BRAND_COLOR_KEY) or defaults.brand_color,
            logo_url=self.store.get_item(LOGO_URL_KEY) or defaults.logo_url,
        )
        return self.settings

    def update(
        self,
        brand_name: Optional[str] = None,
        brand_color: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> BrandingSettings:
        """
        Apply and persist branding changes.

        Raises:
            BrandingValidationError: If a value is not text, the name is blank or the color is not #rrggbb
        """
        for label, value in (("Brand name", brand_name), ("Brand color", brand_color), ("Logo URL", logo_url)):
            if value is not None and not isinstance(value, str):
                raise BrandingValidationError(f"{label} must be text")

        changes = {}
        if brand_name is not None:
            if not brand_name.strip():
                raise BrandingValidationError("Brand name cannot be empty")
            changes["brand_name"] = brand_name.strip()
        if brand_color is not None:
            if not _HEX_COLOR_RE.match(brand_color):
                raise BrandingValidationError(f"Invalid brand color: {brand_color}")
            changes["brand_color"] = brand_color.lower()
        if logo_url is not None:
            changes["logo_url"] = logo_url.strip()

        self.settings = replace(self.settings, **changes)
        self.save()
        logger.info("Branding updated: %s", ", ".join(sorted(changes)) or "no changes")
        return self.settings

    def reset(self) -> BrandingSettings:
        self.settings = BrandingSettings()
        self.save()
        logger.info("Branding reset to defaults")
        return self.settings

    def save(self) -> None:
        self.store.set_item(BRAND_NAME_KEY, self.settings.brand_name)
        self.store.set_item(BRAND_COLOR_KEY, self.settings.brand_color)
        self.store.set_item(LOGO_URL_KEY, self.settings.logo_url)

"""
Settings resolver.

The PaymentSettings document is stored as a JSON blob in the
payment_settings table under a single key. A missing or unreadable blob
resolves to the defaults; updates are validated before anything is written.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy.orm import Session

from payflow import models
from payflow.errors import ConfigurationError
from payflow.schemas.settings import PaymentSettings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "payment-settings"


def default_settings() -> PaymentSettings:
    return PaymentSettings()


class SettingsResolver:
    def __init__(self, db: Session):
        self.db = db

    def load(self) -> PaymentSettings:
        record = self.db.get(models.SettingsRecord, SETTINGS_KEY)
        if record is None:
            return default_settings()

        try:
            return PaymentSettings.model_validate(json.loads(record.value))
        except (ValueError, ValidationError) as e:
            logger.warning("Stored payment settings are malformed, using defaults: %s", e)
            return default_settings()

    def update(self, partial: Dict[str, Any]) -> PaymentSettings:
        """
        Shallow-merge `partial` into the current settings and persist.

        Nested objects (company_details) are replaced whole, not merged.

        Raises:
            ConfigurationError: unknown fields, bad values, thresholds out of order
        """
        current = self.load()
        merged = {**current.model_dump(), **partial}
        try:
            new_settings = PaymentSettings.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid payment settings: {e}") from e

        now = datetime.now(timezone.utc).replace(tzinfo=None)
        blob = new_settings.model_dump_json()
        record = self.db.get(models.SettingsRecord, SETTINGS_KEY)
        if record is None:
            self.db.add(models.SettingsRecord(key=SETTINGS_KEY, value=blob, updated_at=now))
        else:
            record.value = blob
            record.updated_at = now
        self.db.commit()

        logger.info("Payment settings updated: %s", ", ".join(sorted(partial)) or "(no fields)")
        return new_settings

"""JSON implementation of CollectionStore over a KeyValueBackend."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from pricetable.domain.exceptions import (
    CorruptedDataError,
    StorageError,
    ValidationError,
)
from pricetable.domain.repository.collection_store import (
    EXPORT_FORMAT_VERSION,
    CollectionStore,
    StorageKey,
)
from pricetable.infrastructure.persistence.key_value_backend import KeyValueBackend

logger = logging.getLogger(__name__)

_DATETIME_FIELDS = ("createdAt", "updatedAt")
_DATE_FIELDS = ("purchaseDate",)


class JsonCollectionStore(CollectionStore):

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._corrupted: set[str] = set()

    @property
    def corrupted_keys(self) -> frozenset[str]:
        """Keys whose stored value could not be read on the last load."""
        return frozenset(self._corrupted)

    # --- CollectionStore interface --------------------------------------------

    def mark_corrupted(self, key: str, reason: str) -> None:
        self._corrupted.add(key)
        logger.warning("Stored data under %s is unusable: %s", key, reason)

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        try:
            text = json.dumps(records, default=_encode_value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to serialize %s: %s", key, exc)
            raise StorageError(f"Could not serialize '{key}': {exc}") from exc

        try:
            if key in self._corrupted:
                self._keep_unreadable_value(key)
            self._backend.set_item(key, text)
        except StorageError:
            logger.error("Failed to save %s", key, exc_info=True)
            raise
        except OSError as exc:
            logger.error("Failed to save %s: %s", key, exc)
            raise StorageError(f"Could not save '{key}': {exc}") from exc

        self._corrupted.discard(key)
        logger.debug("Saved %d record(s) under %s", len(records), key)

    def load(self, key: str, *, strict: bool = False) -> list[dict[str, Any]]:
        try:
            text = self._backend.get_item(key)
            if not text:
                return []
            records = _decode_records(json.loads(text))
        except (OSError, StorageError, ValueError, TypeError, KeyError) as exc:
            self._corrupted.add(key)
            if strict:
                raise CorruptedDataError(key, str(exc)) from exc
            logger.warning(
                "Could not read %s, treating it as empty: %s", key, exc
            )
            return []

        self._corrupted.discard(key)
        return records

    def remove(self, key: str) -> None:
        try:
            self._backend.remove_item(key)
        except OSError as exc:
            raise StorageError(f"Could not remove '{key}': {exc}") from exc
        self._corrupted.discard(key)
        logger.debug("Removed %s", key)

    def clear(self) -> None:
        for key in StorageKey.ALL:
            self.remove(key)
        logger.info("Cleared all stored collections")

    def export_json(self) -> str:
        payload = {
            "products": self.load(StorageKey.PRODUCTS),
            "priceRecords": self.load(StorageKey.PRICE_RECORDS),
            "settings": self.load(StorageKey.SETTINGS),
            "exportedAt": format_datetime(datetime.now(timezone.utc)),
            "version": EXPORT_FORMAT_VERSION,
        }
        return json.dumps(payload, default=_encode_value, ensure_ascii=False, indent=2)

    def import_json(self, text: str) -> None:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValidationError(f"Import data is not valid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ValidationError("Import data must be a JSON object")
        for field in ("products", "priceRecords"):
            if not isinstance(data.get(field), list):
                raise ValidationError(f"Import data is missing a '{field}' array")

        settings = data.get("settings")
        if settings is not None and not isinstance(settings, list):
            raise ValidationError("Import data 'settings' must be an array")

        self.save(StorageKey.PRODUCTS, data["products"])
        self.save(StorageKey.PRICE_RECORDS, data["priceRecords"])
        if settings is not None:
            self.save(StorageKey.SETTINGS, settings)

        logger.info(
            "Imported %d product(s) and %d price record(s)",
            len(data["products"]),
            len(data["priceRecords"]),
        )

    def size_mb(self) -> float:
        try:
            total = 0
            for key in StorageKey.ALL:
                text = self._backend.get_item(key)
                if text:
                    total += len(text.encode("utf-8"))
        except (OSError, StorageError) as exc:
            logger.warning("Could not compute data size: %s", exc)
            return 0.0
        return round(total / 1024 / 1024, 2)

    # --- Internal helpers -----------------------------------------------------

    def _keep_unreadable_value(self, key: str) -> None:
        """Copy the unreadable value of *key* aside before it is overwritten."""
        text = self._backend.get_item(key)
        if not text:
            return
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        backup_key = f"{key}.unreadable-{stamp}"
        self._backend.set_item(backup_key, text)
        logger.warning("Kept the unreadable value of %s as %s", key, backup_key)


# --- Serialization helpers ----------------------------------------------------


def format_datetime(value: datetime) -> str:
    """ISO-8601 in UTC with a ``Z`` suffix, keeping microseconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat().replace("+00:00", "Z")


def parse_datetime(text: str) -> datetime:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_date(text: str) -> date:
    # Older exports stored the purchase date as a full timestamp
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_datetime(text).date()


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        # Written as JSON numbers so other readers compare them numerically
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode_records(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a JSON array, got {type(raw).__name__}")

    records: list[dict[str, Any]] = []
    for item in raw:
        if not isinstance(item, dict):
            records.append(item)
            continue
        record = dict(item)
        for field in _DATETIME_FIELDS:
            if isinstance(record.get(field), str):
                record[field] = parse_datetime(record[field])
        for field in _DATE_FIELDS:
            if isinstance(record.get(field), str):
                record[field] = parse_date(record[field])
        records.append(record)
    return records

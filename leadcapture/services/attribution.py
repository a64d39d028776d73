# leadcapture/services/attribution.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from leadcapture.core.config import settings
from leadcapture.core.logging import get_structlog_logger
from leadcapture.schemas.submission import SubmissionField

logger = get_structlog_logger(__name__)

# Internal attribution key -> HubSpot form field name, in submission order
FIELD_MAPPINGS: Tuple[Tuple[str, str], ...] = (
    ("utmSource", "utm_source"),
    ("utmCampaign", "utm_campaign"),
    ("utmTerm", "utm_term"),
    ("utmContent", "utm_content"),
    ("utmMedium", "utm_medium"),
    ("firstWebsiteVisitAt", "first_website_visit_at"),
    ("landingPage", "landing_page"),
    ("adwordsGclid", "adwords_gclid"),
    ("referrer", "referrer"),
    ("utmSourcesAll", "utm_sources___all"),
    ("utmCampaignsAll", "utm_campaign___all_touches"),
    ("utmContentsAll", "utm_content___all_touches"),
    ("utmTermsAll", "utm_term___all_touches"),
    ("utmMediumsAll", "utm_medium___all_touches"),
    ("utmSourceLast", "utm_source___last_touch"),
    ("utmCampaignLast", "utm_campaign___last_touch"),
    ("utmMediumLast", "utm_medium___last_touch"),
    ("utmContentLast", "utm_content___last_touch"),
    ("utmTermLast", "utm_term___last_touch"),
    ("campaignID", "campaign_id"),
    ("adgroupID", "adgroup_id"),
    ("keywordID", "keyword_id"),
    ("msClkid", "msclkid"),
)


class KeyValueStore:
    """Read-only view over persisted visitor state."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError


class DictStorage(KeyValueStore):
    def __init__(self, items: Optional[Mapping[str, str]] = None):
        self._items = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)


class JsonFileStorage(KeyValueStore):
    """
    Storage backed by a JSON object file of key -> text.

    A missing or unreadable file behaves like empty storage.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get_item(self, key: str) -> Optional[str]:
        try:
            items = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("storage.unreadable", path=str(self.path), error=str(e))
            return None
        if not isinstance(items, dict):
            return None
        value = items.get(key)
        if value is None:
            return None
        # Entries may be stored as nested JSON rather than pre-serialized text
        return value if isinstance(value, str) else json.dumps(value)


def _is_present(value: Any) -> bool:
    # Containers count as present even when empty
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def load_attribution_record(storage: KeyValueStore, key: Optional[str] = None) -> Dict[str, Any]:
    key = key or settings.attribution_storage_key
    raw = storage.get_item(key)
    if raw is None:
        return {}
    try:
        record = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("attribution.parse_failed", key=key, error=str(e))
        return {}
    return record if isinstance(record, dict) else {}


def get_additional_fields(storage: KeyValueStore, key: Optional[str] = None) -> List[SubmissionField]:
    """Project the attribution record onto HubSpot fields, in mapping order."""
    record = load_attribution_record(storage, key)
    return [
        SubmissionField(name=field_name, value=record[internal_key])
        for internal_key, field_name in FIELD_MAPPINGS
        if _is_present(record.get(internal_key))
    ]

import json

from conftest import DEEPLY_NESTED_JSON
from leadcapture.schemas.submission import SubmissionField
from leadcapture.services.attribution import (
    FIELD_MAPPINGS,
    DictStorage,
    JsonFileStorage,
    get_additional_fields,
    load_attribution_record,
)


def _storage(record) -> DictStorage:
    return DictStorage({"dlmc": json.dumps(record)})


def test_field_mappings_table():
    assert len(FIELD_MAPPINGS) == 23
    assert FIELD_MAPPINGS[0] == ("utmSource", "utm_source")
    assert FIELD_MAPPINGS[-1] == ("msClkid", "msclkid")
    internal_keys = [key for key, _ in FIELD_MAPPINGS]
    assert len(set(internal_keys)) == len(internal_keys)


def test_get_additional_fields_follows_mapping_order():
    storage = _storage({"landingPage": "/x", "utmSource": "google"})
    assert get_additional_fields(storage) == [
        SubmissionField(name="utm_source", value="google"),
        SubmissionField(name="landing_page", value="/x"),
    ]


def test_get_additional_fields_skips_falsy_values():
    storage = _storage({
        "utmSource": "",
        "utmCampaign": 0,
        "utmTerm": None,
        "utmContent": False,
        "utmMedium": "cpc",
        "referrer": "https://news.example.com/",
    })
    assert get_additional_fields(storage) == [
        SubmissionField(name="utm_medium", value="cpc"),
        SubmissionField(name="referrer", value="https://news.example.com/"),
    ]


def test_get_additional_fields_ignores_unmapped_keys():
    storage = _storage({"sessionCount": 4, "campaignID": 12345, "msClkid": "abc"})
    assert get_additional_fields(storage) == [
        SubmissionField(name="campaign_id", value=12345),
        SubmissionField(name="msclkid", value="abc"),
    ]


def test_get_additional_fields_all_touch_lists_pass_through():
    storage = _storage({"utmSourcesAll": ["google", "bing"]})
    assert get_additional_fields(storage) == [
        SubmissionField(name="utm_sources___all", value=["google", "bing"]),
    ]


def test_get_additional_fields_missing_record():
    assert get_additional_fields(DictStorage()) == []


def test_get_additional_fields_unparseable_record():
    assert get_additional_fields(DictStorage({"dlmc": "{not json"})) == []
    assert get_additional_fields(DictStorage({"dlmc": "null"})) == []
    assert get_additional_fields(DictStorage({"dlmc": '["utmSource"]'})) == []


def test_load_attribution_record_custom_key():
    storage = DictStorage({"attribution": json.dumps({"utmTerm": "crm"})})
    assert load_attribution_record(storage, "attribution") == {"utmTerm": "crm"}
    assert load_attribution_record(storage) == {}


def test_json_file_storage(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(
        json.dumps({
            "dlmc": json.dumps({"utmSource": "linkedin"}),
            "nested": {"utmSource": "bing"},
        }),
        encoding="utf-8",
    )
    storage = JsonFileStorage(path)
    assert storage.get_item("missing") is None
    assert get_additional_fields(storage) == [SubmissionField(name="utm_source", value="linkedin")]
    assert get_additional_fields(storage, "nested") == [SubmissionField(name="utm_source", value="bing")]


def test_json_file_storage_missing_file(tmp_path):
    storage = JsonFileStorage(tmp_path / "absent.json")
    assert storage.get_item("dlmc") is None
    assert get_additional_fields(storage) == []


def test_get_additional_fields_deeply_nested_record():
    storage = DictStorage({"dlmc": DEEPLY_NESTED_JSON})
    assert load_attribution_record(storage) == {}
    assert get_additional_fields(storage) == []


def test_json_file_storage_deeply_nested_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(DEEPLY_NESTED_JSON, encoding="utf-8")
    storage = JsonFileStorage(path)
    assert storage.get_item("dlmc") is None
    assert get_additional_fields(storage) == []

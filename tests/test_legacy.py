import json

from habitquest.legacy import completions_from_dates, import_legacy_export
from habitquest.models import Frequency, Status
from habitquest.store import DEFAULT_TAG


def test_dates_become_successes():
    out = completions_from_dates(["2024-03-01", "2024-03-03"], Frequency.daily)
    assert out == {"2024-03-01": Status.success, "2024-03-03": Status.success}


def test_weekly_dates_collapse_to_latest_in_week():
    out = completions_from_dates(["2024-03-04", "2024-03-08", "2024-03-06", "2024-03-11"], Frequency.weekly)
    assert out == {"2024-03-08": Status.success, "2024-03-11": Status.success}


def test_import_export():
    habits = [
        {
            "id": 2,
            "name": "Gym",
            "description": "",
            "category": "Sport",
            "frequency": "monthly",
            "color": "#10b981",
            "completedDates": ["2024-01-05", "2024-01-20", "2024-02-01T08:00:00.000Z"],
            "createdAt": "2024-01-01T10:00:00.000Z",
            "streak": 2,
        },
        {"id": 2, "name": "Duplicate", "frequency": "daily", "completedDates": []},
        {"id": 5, "name": "Read", "frequency": "daily", "completedDates": []},
    ]
    store = import_legacy_export(json.dumps(habits), json.dumps(["Sport", " Sport ", "General"]))

    assert [h.id for h in store.habits] == [2, 5]
    gym = store.get(2)
    assert gym.completions == {"2024-01-20": Status.success, "2024-02-01": Status.success}
    assert gym.streak == 2
    assert gym.created_at == "2024-01-01T10:00:00.000Z"
    assert store.get(5).category == DEFAULT_TAG
    assert store.tag_names() == ["Sport", "General"]


def test_import_without_tags_keeps_default():
    store = import_legacy_export("[]")
    assert store.habits == []
    assert store.tag_names() == [DEFAULT_TAG]


def test_import_skips_invalid_ids_and_empty_names(caplog):
    raw = [
        {"id": 0, "completedDates": []},
        {"id": -3, "name": "  "},
        {"id": 4, "name": ""},
        {"id": 1, "name": "Walk", "completedDates": ["2024-03-01"]},
    ]
    store = import_legacy_export(json.dumps(raw))
    assert [h.id for h in store.habits] == [1]
    assert "invalid id" in caplog.text

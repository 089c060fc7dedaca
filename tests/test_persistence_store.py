from __future__ import annotations

import json
import sqlite3

import pytest

from app.domain.exceptions import StorageError
from app.domain.user_context import UserContext
from app.enums.common import AlertSeverity
from app.schemas.records import AppAlert, UserStats
from infrastructure.database.repositories.persistence_store import Collection, PersistenceStore


def test_keys_are_namespaced_per_user(store, db_handler, make_diagnosis):
    store.save_scan(make_diagnosis())
    store.save_stats(UserStats(xp=10))

    assert db_handler.list_keys("smartgrow_") == ["smartgrow_scans_user-1", "smartgrow_user_stats_user-1"]


def test_anonymous_store_uses_base_keys(db_handler, make_diagnosis):
    PersistenceStore(db_handler).save_scan(make_diagnosis())
    assert db_handler.list_keys("smartgrow_") == ["smartgrow_scans"]


def test_users_are_isolated(store, make_diagnosis):
    other = store.for_user(UserContext("user-2"))
    store.save_scan(make_diagnosis(id="mine"))

    assert other.get_scans() == []
    assert store.user.user_id == "user-1"


def test_missing_collections_read_empty(store):
    assert store.get_scans() == []
    assert store.get_sessions() == []
    assert store.get_alerts() == []
    assert store.get_stats() == UserStats()


def test_malformed_json_reads_as_absent(store, db_handler):
    db_handler.set_value("smartgrow_scans_user-1", "{not json")
    db_handler.set_value("smartgrow_user_stats_user-1", "[1, 2")

    assert store.get_scans() == []
    assert store.get_stats().xp == 0


def test_non_list_collection_reads_empty(store, db_handler):
    db_handler.set_value("smartgrow_monitoring_user-1", json.dumps({"id": "x"}))
    assert store.get_sessions() == []


def test_invalid_records_are_dropped(store, db_handler):
    db_handler.set_value(
        "smartgrow_scans_user-1",
        json.dumps(
            [
                {"id": "good", "timestamp": 1, "plantName": "Fern", "severity": "Mild"},
                {"plantName": "no id"},
                {"id": "legacy", "timestamp": 2},
            ]
        ),
    )

    assert [scan.id for scan in store.get_scans()] == ["good", "legacy"]


def test_stored_format_is_camel_case(store, db_handler, make_diagnosis):
    store.save_scan(make_diagnosis(id="s1"))

    stored = json.loads(db_handler.get_value("smartgrow_scans_user-1"))
    assert stored[0]["plantName"] == "Tomato"
    assert stored[0]["organicTreatment"] == "Neem oil"
    assert "plant_name" not in stored[0]


def test_upsert_replaces_in_place(store, make_diagnosis):
    store.save_scan(make_diagnosis(id="a"))
    store.save_scan(make_diagnosis(id="b"))
    store.save_scan(make_diagnosis(id="a", plant_name="Pepper"))

    scans = store.get_scans()
    assert [s.id for s in scans] == ["b", "a"]
    assert scans[1].plant_name == "Pepper"


def test_upsert_rejects_wrong_model(store, make_diagnosis):
    with pytest.raises(TypeError):
        store.upsert(Collection.MONITORING, make_diagnosis())


def test_delete_missing_does_not_write(store, db_handler, make_diagnosis, monkeypatch):
    store.save_scan(make_diagnosis(id="a"))

    def _fail(*_args, **_kwargs):
        raise AssertionError("unexpected write")

    monkeypatch.setattr(db_handler, "set_value", _fail)
    assert store.delete_scan("missing") is False


def test_toggle_archive(store, make_diagnosis):
    store.save_scan(make_diagnosis(id="a"))

    assert store.toggle_archive("a").archived is True
    assert store.get_scan("a").archived is True
    assert store.toggle_archive("a").archived is False
    assert store.toggle_archive("missing") is None


def test_add_and_clear_alerts(store):
    store.add_alert(AppAlert(id="1", title="First", timestamp=1))
    store.add_alert(AppAlert(id="2", title="Second", severity=AlertSeverity.WARNING, timestamp=2))

    assert [a.id for a in store.get_alerts()] == ["2", "1"]
    store.clear_alerts()
    assert store.get_alerts() == []


def test_write_failure_raises_storage_error(store, db_handler, make_diagnosis, monkeypatch):
    def _locked(*_args, **_kwargs):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(db_handler, "set_value", _locked)

    with pytest.raises(StorageError) as excinfo:
        store.save_scan(make_diagnosis())
    assert excinfo.value.detail == {"key": "smartgrow_scans_user-1"}


def _seed_with_legacy_item(db_handler):
    db_handler.set_value(
        "smartgrow_scans_user-1",
        json.dumps(
            [
                {"id": "good", "timestamp": 1, "plantName": "Fern", "severity": "Mild"},
                {"plantName": "legacy without id"},
            ]
        ),
    )


def _stored_scans(db_handler):
    return json.loads(db_handler.get_value("smartgrow_scans_user-1"))


def test_upsert_keeps_items_that_fail_validation(store, db_handler, make_diagnosis):
    _seed_with_legacy_item(db_handler)

    store.save_scan(make_diagnosis(id="new"))

    stored = _stored_scans(db_handler)
    assert [item.get("id") for item in stored] == ["new", "good", None]
    assert stored[2] == {"plantName": "legacy without id"}
    assert [scan.id for scan in store.get_scans()] == ["new", "good"]


def test_delete_and_toggle_keep_items_that_fail_validation(store, db_handler):
    _seed_with_legacy_item(db_handler)

    store.toggle_archive("good")
    assert _stored_scans(db_handler)[1] == {"plantName": "legacy without id"}

    assert store.delete_scan("good") is True
    assert _stored_scans(db_handler) == [{"plantName": "legacy without id"}]

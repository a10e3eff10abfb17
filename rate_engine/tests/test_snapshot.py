import json
import os

import pytest

from rate_engine.core.errors import PersistenceError, SnapshotWriteError
from rate_engine.schemas.snapshot import SnapshotRecord
from rate_engine.storage.snapshot import SnapshotWriter, sanitize_route_id


def make_record(route_id="JHB-CPT/042"):
    return SnapshotRecord(
        route_id=route_id,
        driver_id="drv-7",
        planned_distance_km=10.0,
        parcel_count=12,
        metadata={"depot": "Midrand", "tags": ["a", "b"]},
        input_hash="a" * 64,
        output_hash="b" * 64,
        config_version="model_c_v1",
        service_version="rate-engine-test",
        rate_per_parcel_zar=31.25,
        total_payout_zar=375.0,
        created_at="2026-10-19T08:30:15Z",
    )


@pytest.mark.persistence
class TestSanitize:

    @pytest.mark.parametrize("route_id,expected", [
        ("JHB-CPT/042", "JHB-CPT_042"),
        ("a\\b c:d", "a_b_c_d"),
        ("plain", "plain"),
        ("", "route"),
    ])
    def test_sanitize_route_id(self, route_id, expected):
        assert sanitize_route_id(route_id) == expected


@pytest.mark.persistence
class TestSnapshotWriter:

    def test_save_names_file_by_timestamp_and_route(self, snapshot_writer, snapshot_dir):
        path = snapshot_writer.save("JHB-CPT/042", make_record())
        assert path == str(snapshot_dir / "20261019T083015Z_JHB-CPT_042.json")
        assert os.path.exists(path)

    def test_empty_route_uses_placeholder(self, snapshot_writer, snapshot_dir):
        path = snapshot_writer.save("", make_record(route_id=""))
        assert os.path.basename(path) == "20261019T083015Z_route.json"

    def test_document_is_indented_json(self, snapshot_writer):
        path = snapshot_writer.save("R1", make_record())
        with open(path, encoding="utf-8") as f:
            text = f.read()
        assert text.endswith("\n")
        assert '\n  "routeId": "JHB-CPT/042"' in text
        assert json.loads(text)["totalPayoutZar"] == 375.0

    def test_round_trip(self, snapshot_writer):
        record = make_record()
        path = snapshot_writer.save(record.route_id, record)
        loaded = snapshot_writer.load(path)
        assert loaded == record
        assert loaded.input_hash and loaded.config_version and loaded.created_at

    def test_same_second_collision_keeps_both(self, snapshot_writer):
        first = snapshot_writer.save("R1", make_record(route_id="R1"))
        second = snapshot_writer.save("R1", make_record(route_id="R1"))
        assert first != second
        assert second.endswith("_R1_1.json")
        assert os.path.exists(first) and os.path.exists(second)

    def test_unwritable_directory_raises(self, tmp_path, fixed_clock):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file in the way")
        writer = SnapshotWriter(str(blocker / "snapshots"), clock=fixed_clock)

        with pytest.raises(SnapshotWriteError) as exc_info:
            writer.save("R1", make_record())
        assert isinstance(exc_info.value, PersistenceError)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_null_byte_in_route_raises_persistence_error(self, snapshot_writer):
        with pytest.raises(SnapshotWriteError) as exc_info:
            snapshot_writer.save("A\x00B", make_record(route_id="A\x00B"))
        assert isinstance(exc_info.value.__cause__, ValueError)

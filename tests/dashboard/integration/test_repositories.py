from datetime import datetime

import pytest
from sqlalchemy import select
from trafficpulse.common.exceptions import DuplicateCenterError, MalformedRecordError
from trafficpulse.common.database import IncidentRecordDB
from trafficpulse.common.schemas import IncidentRecord
from trafficpulse.dashboard.domain import CenterAdmin
from trafficpulse.dashboard.infrastructure import SQLAlchemyAdminRepository, SQLAlchemyIncidentRepository

@pytest.fixture
def incidents(database, sample_records):
    repo = SQLAlchemyIncidentRepository(database)
    repo.save_all(sample_records)
    return repo

@pytest.fixture
def admins(database):
    return SQLAlchemyAdminRepository(database)

def test_find_within_tolerance(incidents):
    record = incidents.find_by_coordinate(18.500005, 73.850005, 0.00001)
    assert record is not None
    assert record.center_id == "C001"

def test_find_outside_tolerance(incidents):
    assert incidents.find_by_coordinate(18.6, 73.85, 0.00001) is None
    assert incidents.find_by_coordinate(18.5, 73.8502, 0.00001) is None

def test_find_requires_both_axes(incidents):
    # Latitude of C001, longitude of C002
    assert incidents.find_by_coordinate(18.5, 73.86, 0.00001) is None

def test_find_multiple_matches_returns_first_stored(database, incidents, document_factory):
    incidents.save(IncidentRecord.model_validate(document_factory("C100", "East", 18.500001, 73.850001)))
    record = incidents.find_by_coordinate(18.5, 73.85, 0.00001)
    assert record.center_id == "C001"

def test_find_is_deterministic(incidents):
    first = incidents.find_by_coordinate(18.51, 73.86, 0.00001)
    second = incidents.find_by_coordinate(18.51, 73.86, 0.00001)
    assert first == second

def test_list_all_in_insertion_order(incidents, sample_records):
    records = incidents.list_all()
    assert [r.center_id for r in records] == ["C001", "C002", "C003"]
    assert records == sample_records

def test_save_fills_indexed_columns(database, incidents):
    rows = database.run(lambda session: [
        (row.center_id, row.zone, row.latitude, row.longitude)
        for row in session.query(IncidentRecordDB).order_by(IncidentRecordDB.id)
    ])
    assert rows[0] == ("C001", "North", 18.5, 73.85)

def test_corrupt_stored_document_is_malformed(database, incidents):
    def corrupt(session):
        session.add(IncidentRecordDB(
            center_id="C666", latitude=1.0, longitude=1.0,
            document={"centerId": "C666", "violations": {"total": "lots"}},
        ))
    database.run(corrupt)
    with pytest.raises(MalformedRecordError) as exc_info:
        incidents.find_by_coordinate(1.0, 1.0, 0.00001)
    assert exc_info.value.center_id == "C666"

def test_admin_add_and_get(admins):
    admins.add(CenterAdmin("C001", "hash", 18.5, 73.85, "Shivajinagar"))
    admin = admins.get("C001")
    assert admin == CenterAdmin("C001", "hash", 18.5, 73.85, "Shivajinagar")
    assert admins.get("C404") is None

def test_admin_unique_center(admins):
    admins.add(CenterAdmin("C001", "hash", 18.5, 73.85, "Shivajinagar"))
    with pytest.raises(DuplicateCenterError):
        admins.add(CenterAdmin("C001", "other", 0.0, 0.0, "Dup"))

def test_admin_list_all(admins):
    admins.add(CenterAdmin("C002", "hash", 18.6, 73.9, "Kothrud"))
    admins.add(CenterAdmin("C001", "hash", 18.5, 73.85, "Shivajinagar"))
    assert [a.center_id for a in admins.list_all()] == ["C002", "C001"]

def _recorded_at(database, center_id):
    stmt = select(IncidentRecordDB.recorded_at).where(IncidentRecordDB.center_id == center_id)
    return database.run(lambda session: session.execute(stmt).scalar_one())

def test_save_converts_offset_date_to_utc(database, document_factory):
    repo = SQLAlchemyIncidentRepository(database)
    repo.save(IncidentRecord.model_validate(document_factory("C200", date="2024-01-15T23:00:00-05:00")))
    repo.save(IncidentRecord.model_validate(document_factory("C201", date="2024-01-15T23:00:00")))

    assert _recorded_at(database, "C200") == datetime(2024, 1, 16, 4, 0)
    assert _recorded_at(database, "C201") == datetime(2024, 1, 15, 23, 0)

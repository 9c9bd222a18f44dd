"""
SQLAlchemy-backed repositories.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ...common.database import CenterAdminDB, Database, IncidentRecordDB
from ...common.exceptions import DuplicateCenterError, StoreError
from ...common.logging import log_execution_time, setup_logger
from ...common.schemas import IncidentRecord
from ..domain.entities import CenterAdmin
from ..domain.repositories import AdminRepository, IncidentRepository

logger = setup_logger("trafficpulse.repositories")


def _to_naive_utc(value: datetime) -> datetime:
    """recorded_at holds naive UTC; offset-aware dates are converted first."""
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None)


class SQLAlchemyIncidentRepository(IncidentRepository):
    """
    Incident snapshots stored as JSON documents with indexed position columns.
    """
    def __init__(self, database: Database):
        self.database = database

    @log_execution_time(logger)
    def find_by_coordinate(self, lat: float, lng: float, tolerance: float) -> Optional[IncidentRecord]:
        # Primary key order makes multi-match results deterministic
        stmt = (
            select(IncidentRecordDB.document)
            .where(IncidentRecordDB.latitude.between(lat - tolerance, lat + tolerance))
            .where(IncidentRecordDB.longitude.between(lng - tolerance, lng + tolerance))
            .order_by(IncidentRecordDB.id)
            .limit(1)
        )
        document = self.database.run(lambda session: session.execute(stmt).scalar_one_or_none())
        if document is None:
            return None
        return IncidentRecord.from_document(document)

    @log_execution_time(logger)
    def list_all(self) -> List[IncidentRecord]:
        stmt = select(IncidentRecordDB.document).order_by(IncidentRecordDB.id)
        documents = self.database.run(lambda session: list(session.execute(stmt).scalars()))
        return [IncidentRecord.from_document(doc) for doc in documents]

    def save(self, record: IncidentRecord) -> None:
        location = record.location
        row = IncidentRecordDB(
            center_id=record.center_id,
            zone=location.zone if location else None,
            district=location.district if location else None,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
            document=record.to_document(),
        )
        if record.date is not None:
            row.recorded_at = _to_naive_utc(record.date)
        self.database.run(lambda session: session.add(row))

    def save_all(self, records: List[IncidentRecord]) -> int:
        for record in records:
            self.save(record)
        return len(records)


class SQLAlchemyAdminRepository(AdminRepository):
    def __init__(self, database: Database):
        self.database = database

    @staticmethod
    def _to_entity(row: CenterAdminDB) -> CenterAdmin:
        return CenterAdmin(
            center_id=row.center_id,
            password_hash=row.password_hash,
            lat=row.lat,
            lng=row.lng,
            center_name=row.center_name,
        )

    def get(self, center_id: str) -> Optional[CenterAdmin]:
        stmt = select(CenterAdminDB).where(CenterAdminDB.center_id == center_id)

        def _get(session):
            row = session.execute(stmt).scalar_one_or_none()
            return self._to_entity(row) if row is not None else None

        return self.database.run(_get)

    def list_all(self) -> List[CenterAdmin]:
        stmt = select(CenterAdminDB).order_by(CenterAdminDB.id)
        return self.database.run(
            lambda session: [self._to_entity(row) for row in session.execute(stmt).scalars()]
        )

    def add(self, admin: CenterAdmin) -> None:
        row = CenterAdminDB(
            center_id=admin.center_id,
            password_hash=admin.password_hash,
            lat=admin.lat,
            lng=admin.lng,
            center_name=admin.center_name,
        )

        def _add(session):
            session.add(row)
            session.flush()

        try:
            self.database.run(_add)
        except StoreError as e:
            if isinstance(e.__cause__, IntegrityError):
                raise DuplicateCenterError(f"Admin for center {admin.center_id} already exists") from e
            raise

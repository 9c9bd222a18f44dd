from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Index, Integer, String

from .database import Base

# --- Incident Snapshots ---

class IncidentRecordDB(Base):
    __tablename__ = "incident_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(String, nullable=False, index=True)
    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    zone = Column(String, nullable=True, index=True)
    district = Column(Integer, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    document = Column(JSON, nullable=False) # Full record as submitted (camelCase keys)

    __table_args__ = (
        Index("ix_incident_records_lat_lng", "latitude", "longitude"),
    )

# --- Center Credentials ---

class CenterAdminDB(Base):
    __tablename__ = "center_admins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    center_id = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    center_name = Column(String, nullable=False)

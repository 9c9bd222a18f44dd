import pytest
from fastapi.testclient import TestClient

from trafficpulse.common.config import ConfigManager
from trafficpulse.common.database import Database
from trafficpulse.common.schemas import IncidentRecord


def make_document(center_id="C001", zone="North", lat=18.5, lng=73.85, **overrides):
    """Fully populated incident document; sections can be replaced via keyword."""
    document = {
        "centerId": center_id,
        "date": "2024-01-15T00:00:00",
        "location": {"zone": zone, "district": 3, "latitude": lat, "longitude": lng},
        "violations": {"total": 10, "reported": 8, "speeding": 4, "redLight": 2},
        "challans": {
            "total": 6,
            "collected_amount": 6000.0,
            "pending_amount": 500.0,
            "breakdown": {"Speeding": 4, "No Helmet": 2},
        },
        "accidents": {"today": 1, "overall": 20, "fatal": 2, "nonFatal": 18},
        "enforcement_officers": 3,
        "trafficVolume": {"peak": 4000, "offPeak": 6000, "daily": 10000},
        "cameras": {"operational": 3, "total": 4},
        "response": {"avgTimeMinutes": 12.0},
    }
    document.update(overrides)
    return document


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def sample_document():
    return make_document()


@pytest.fixture
def sample_record(sample_document):
    return IncidentRecord.model_validate(sample_document)


@pytest.fixture
def sample_records():
    return [
        IncidentRecord.model_validate(make_document("C001", "North", 18.5, 73.85)),
        IncidentRecord.model_validate(make_document("C002", "South", 18.51, 73.86)),
        IncidentRecord.model_validate(make_document("C003", "North", 18.52, 73.87)),
    ]


@pytest.fixture
def database():
    db = Database("sqlite://", query_timeout=2.0)
    db.connect()
    db.init_schema()
    yield db
    db.close()


@pytest.fixture
def app_config():
    return ConfigManager.structure({
        "database": {"url": "sqlite://"},
        "auth": {"secret_key": "test-secret", "bcrypt_rounds": 4},
        "logging": {"level": "WARNING"},
    })


@pytest.fixture
def client(app_config):
    from trafficpulse.dashboard.presentation.api import create_app

    app = create_app(app_config)
    with TestClient(app) as test_client:
        yield test_client

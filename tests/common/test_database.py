import time

import pytest
from sqlalchemy import text
from trafficpulse.common.database import ConnectionState, Database
from trafficpulse.common.exceptions import StoreError
from trafficpulse.common.metrics import QueryMetricsCollector

def test_lifecycle_states():
    db = Database("sqlite://")
    assert db.state is ConnectionState.UNINITIALIZED
    assert not db.is_ready

    db.connect()
    assert db.state is ConnectionState.READY
    assert db.is_ready

    db.close()
    assert db.state is ConnectionState.CLOSED

def test_connect_is_idempotent():
    db = Database("sqlite://")
    db.connect()
    engine = db.engine
    db.connect()
    assert db.engine is engine
    db.close()

def test_lazy_connect_on_first_query():
    db = Database("sqlite://")
    assert db.run(lambda session: session.execute(text("SELECT 1")).scalar()) == 1
    assert db.is_ready
    db.close()

def test_closed_database_cannot_reconnect():
    db = Database("sqlite://")
    db.connect()
    db.close()
    with pytest.raises(StoreError):
        db.connect()

def test_close_is_idempotent():
    db = Database("sqlite://")
    db.close()
    db.close()
    assert db.state is ConnectionState.CLOSED

def test_failed_connect_resets_state(tmp_path):
    # A directory path cannot be opened as a sqlite file
    db = Database(f"sqlite:///{tmp_path}")
    with pytest.raises(StoreError):
        db.connect()
    assert db.state is ConnectionState.UNINITIALIZED

def test_sqlite_file_parent_is_created(tmp_path):
    path = tmp_path / "nested" / "store.db"
    db = Database(f"sqlite:///{path}")
    db.connect()
    db.init_schema()
    assert path.exists()
    db.close()

def test_run_records_query_metrics():
    metrics = QueryMetricsCollector()
    db = Database("sqlite://", metrics=metrics)
    db.run(lambda session: session.execute(text("SELECT 1")).scalar())
    db.run(lambda session: session.execute(text("SELECT 1")).scalar())
    assert metrics.get_metrics().queries == 2
    db.close()

def test_run_wraps_store_faults():
    metrics = QueryMetricsCollector()
    db = Database("sqlite://", metrics=metrics)
    with pytest.raises(StoreError):
        db.run(lambda session: session.execute(text("SELECT * FROM missing_table")))
    assert metrics.get_metrics().failures == 1
    db.close()

def test_run_times_out():
    metrics = QueryMetricsCollector()
    db = Database("sqlite://", query_timeout=0.05, metrics=metrics)
    with pytest.raises(StoreError, match="timeout"):
        db.run(lambda session: time.sleep(0.5))
    snapshot = metrics.get_metrics()
    assert snapshot.timeouts == 1
    assert snapshot.failures == 1
    db.close()

def test_run_explicit_timeout_overrides_default():
    db = Database("sqlite://", query_timeout=0.01)
    assert db.run(lambda session: time.sleep(0.05) or "done", timeout=2.0) == "done"
    db.close()

def test_init_schema_creates_tables(database):
    tables = database.run(
        lambda session: [row[0] for row in session.execute(
            text("SELECT name FROM sqlite_master WHERE type='table'")
        )]
    )
    assert "incident_records" in tables
    assert "center_admins" in tables

def test_fast_query_after_workers_time_out():
    db = Database("sqlite://", query_timeout=0.05, max_workers=2)
    for _ in range(2):
        with pytest.raises(StoreError):
            db.run(lambda session: time.sleep(1.0))

    start = time.time()
    assert db.run(lambda session: session.execute(text("SELECT 1")).scalar(), timeout=0.5) == 1
    assert time.time() - start < 0.5
    db.close()

def test_timed_out_statement_is_interrupted(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'slow.db'}", query_timeout=0.2, max_workers=1)
    slow = text(
        "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c WHERE x < 20000000) "
        "SELECT count(*) FROM c"
    )
    with pytest.raises(StoreError, match="timeout"):
        db.run(lambda session: session.execute(slow).scalar())

    assert db.run(lambda session: session.execute(text("SELECT 2")).scalar(), timeout=1.0) == 2
    db.close()

def test_run_after_close_fails():
    db = Database("sqlite://")
    db.connect()
    db.close()
    with pytest.raises(StoreError):
        db.run(lambda session: session.execute(text("SELECT 1")).scalar())

from sqlalchemy import func, select
from trafficpulse.common.database import Database, IncidentRecordDB
from trafficpulse.dashboard.infrastructure import load_incident_csv
from trafficpulse.main import main

def test_generate_writes_csv(tmp_path):
    output = tmp_path / "incidents.csv"
    assert main(["generate", "--output", str(output), "--count", "4", "--seed", "1"]) == 0
    assert len(load_incident_csv(output)) == 4

def test_seed_from_csv(tmp_path):
    csv_path = tmp_path / "incidents.csv"
    db_path = tmp_path / "store" / "tp.db"
    main(["generate", "--output", str(csv_path), "--count", "3", "--seed", "2"])

    assert main(["seed", "--csv", str(csv_path), f"database.url=sqlite:///{db_path}"]) == 0

    db = Database(f"sqlite:///{db_path}")
    count = db.run(lambda session: session.execute(select(func.count(IncidentRecordDB.id))).scalar())
    db.close()
    assert count == 3

def test_init_db(tmp_path):
    db_path = tmp_path / "tp.db"
    assert main(["init-db", f"database.url=sqlite:///{db_path}"]) == 0
    assert db_path.exists()

def test_bad_override_is_reported(tmp_path, capsys):
    assert main(["init-db", "server.port=not-a-number"]) == 1
    assert "configuration" in capsys.readouterr().err

import argparse
import sys

from .common.config import ConfigManager
from .common.exceptions import TrafficPulseError
from .common.logging import configure_logging


def _serve(cfg, args):
    import uvicorn
    from .dashboard.presentation.api import create_app

    app = create_app(cfg)
    print(f"Starting server at http://{cfg.server.host}:{cfg.server.port}")
    uvicorn.run(app, host=cfg.server.host, port=cfg.server.port)


def _init_db(cfg, args):
    from .dashboard.application.builder import DashboardBuilder

    services = DashboardBuilder(cfg).build_repositories().build()
    try:
        services.database.connect()
        services.database.init_schema()
        print("Schema ready.")
    finally:
        services.database.close()


def _seed(cfg, args):
    from .dashboard.application.builder import DashboardBuilder
    from .dashboard.infrastructure import generate_synthetic_records, load_incident_csv

    if args.csv:
        records = load_incident_csv(args.csv)
    else:
        records = generate_synthetic_records(count=args.count, seed=args.seed)

    services = DashboardBuilder(cfg).build()
    try:
        services.database.connect()
        services.database.init_schema()
        saved = services.incidents.save_all(records)
        print(f"Seeded {saved} incident records.")
    finally:
        services.database.close()


def _generate(cfg, args):
    from .dashboard.infrastructure import generate_synthetic_records, write_incident_csv

    records = generate_synthetic_records(count=args.count, seed=args.seed)
    path = write_incident_csv(records, args.output)
    print(f"Wrote {len(records)} records to {path}")


def main(argv=None):
    """
    Main entry point for the TrafficPulse backend.
    Extra key=value arguments are applied as config overrides, e.g.
    `trafficpulse serve server.port=9000 database.url=sqlite:///tmp/tp.db`
    """
    parser = argparse.ArgumentParser(description="TrafficPulse - traffic management monitoring backend")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the HTTP API")
    sub.add_parser("init-db", help="Create the database schema")

    seed = sub.add_parser("seed", help="Load incident records into the store")
    seed.add_argument("--csv", help="CSV file produced by `generate`; synthetic data when omitted")
    seed.add_argument("--count", type=int, default=12)
    seed.add_argument("--seed", type=int, default=None)

    generate = sub.add_parser("generate", help="Write synthetic incident records to CSV")
    generate.add_argument("--output", default="data/incidents.csv")
    generate.add_argument("--count", type=int, default=12)
    generate.add_argument("--seed", type=int, default=None)

    args, unknown = parser.parse_known_args(argv)

    try:
        cfg = ConfigManager().load_app_config(overrides=unknown)
    except (FileNotFoundError, TrafficPulseError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(cfg.logging.level)

    handlers = {
        "serve": _serve,
        "init-db": _init_db,
        "seed": _seed,
        "generate": _generate,
    }
    try:
        handlers[args.command](cfg, args)
    except TrafficPulseError as e:
        print(f"Error running {args.command}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

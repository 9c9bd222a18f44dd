from dataclasses import dataclass
from typing import Optional

from omegaconf import DictConfig

from ...common.database import Database
from ...common.logging import setup_logger
from ...common.metrics import QueryMetricsCollector
from ..infrastructure.repositories import SQLAlchemyAdminRepository, SQLAlchemyIncidentRepository
from ..infrastructure.security import PasswordHasher, TokenSigner
from .admin_service import AdminService
from .aggregator import IncidentAggregator
from .geo_resolver import GeoResolver
from .simulation import SimulationService

logger = setup_logger("trafficpulse.builder")


@dataclass
class DashboardServices:
    """Everything a request handler needs, built once per process."""
    database: Database
    incidents: SQLAlchemyIncidentRepository
    admins: SQLAlchemyAdminRepository
    resolver: GeoResolver
    aggregator: IncidentAggregator
    admin_service: AdminService
    simulation: Optional[SimulationService]
    metrics: QueryMetricsCollector


class DashboardBuilder:
    """
    Builder pattern for constructing the dashboard services.
    Centralizes component instantiation and wiring.
    """

    def __init__(self, config: DictConfig):
        self.config = config
        self.metrics_collector = QueryMetricsCollector()

        # Components
        self.database: Optional[Database] = None
        self.incidents: Optional[SQLAlchemyIncidentRepository] = None
        self.admins: Optional[SQLAlchemyAdminRepository] = None
        self.resolver: Optional[GeoResolver] = None
        self.admin_service: Optional[AdminService] = None
        self.simulation: Optional[SimulationService] = None

    def build_database(self) -> 'DashboardBuilder':
        db_cfg = self.config.database
        self.database = Database(
            url=db_cfg.url,
            query_timeout=db_cfg.query_timeout_seconds,
            echo=db_cfg.echo,
            pool_pre_ping=db_cfg.pool_pre_ping,
            metrics=self.metrics_collector,
        )
        return self

    def build_repositories(self) -> 'DashboardBuilder':
        if not self.database:
            self.build_database()
        self.incidents = SQLAlchemyIncidentRepository(self.database)
        self.admins = SQLAlchemyAdminRepository(self.database)
        return self

    def build_resolver(self) -> 'DashboardBuilder':
        if not self.incidents:
            self.build_repositories()
        self.resolver = GeoResolver(
            self.incidents,
            tolerance=self.config.resolver.tolerance_degrees,
            metrics=self.metrics_collector,
        )
        return self

    def build_admin_service(self) -> 'DashboardBuilder':
        if not self.admins:
            self.build_repositories()
        auth_cfg = self.config.auth
        if auth_cfg.secret_key == "change-me":
            logger.warning("auth.secret_key is the default; set ADMIN_KEY_SECRET in production")
        self.admin_service = AdminService(
            self.admins,
            PasswordHasher(rounds=auth_cfg.bcrypt_rounds),
            TokenSigner(auth_cfg.secret_key, auth_cfg.algorithm, auth_cfg.token_expire_minutes),
        )
        return self

    def build_simulation(self) -> 'DashboardBuilder':
        sim_cfg = self.config.simulation
        if sim_cfg.enabled:
            self.simulation = SimulationService(
                revenue_per_violation=sim_cfg.revenue_per_violation,
                trend_days=sim_cfg.trend_days,
            )
        return self

    def build(self) -> DashboardServices:
        if not self.resolver:
            self.build_resolver()
        if not self.admin_service:
            self.build_admin_service()
        if not self.simulation:
            self.build_simulation()

        return DashboardServices(
            database=self.database,
            incidents=self.incidents,
            admins=self.admins,
            resolver=self.resolver,
            aggregator=IncidentAggregator(),
            admin_service=self.admin_service,
            simulation=self.simulation,
            metrics=self.metrics_collector,
        )

"""
Center admin registration and login.
"""
from typing import List

from ...common.exceptions import AuthenticationError, DuplicateCenterError
from ...common.logging import setup_logger
from ...common.schemas import AdminCreate, AdminPublic
from ..domain.entities import CenterAdmin
from ..domain.repositories import AdminRepository
from ..infrastructure.security import PasswordHasher, TokenSigner

logger = setup_logger("trafficpulse.admins")


class AdminService:
    def __init__(self, repository: AdminRepository, hasher: PasswordHasher, signer: TokenSigner):
        self.repository = repository
        self.hasher = hasher
        self.signer = signer

    def add_admin(self, data: AdminCreate) -> CenterAdmin:
        if self.repository.get(data.center_id) is not None:
            raise DuplicateCenterError(f"Admin for center {data.center_id} already exists")

        admin = CenterAdmin(
            center_id=data.center_id,
            password_hash=self.hasher.hash(data.password),
            lat=data.lat,
            lng=data.lng,
            center_name=data.center_name,
        )
        self.repository.add(admin)
        logger.info(f"Registered admin for center {admin.center_id}")
        return admin

    def list_admins(self) -> List[CenterAdmin]:
        return self.repository.list_all()

    def markers(self) -> List[AdminPublic]:
        """Map markers: one per registered center."""
        return [self.to_public(admin) for admin in self.repository.list_all()]

    def authenticate(self, center_id: str, password: str) -> str:
        """
        Verifies credentials and returns a signed token.
        Unknown center and wrong password fail with the same message.
        """
        admin = self.repository.get(center_id)
        if admin is None:
            logger.warning(f"Login attempt for unknown center {center_id}")
            raise AuthenticationError("Invalid credentials")
        if not self.hasher.verify(password, admin.password_hash):
            logger.warning(f"Password verification failed for center {center_id}")
            raise AuthenticationError("Invalid credentials")
        return self.signer.issue(admin.center_id)

    def current_admin(self, token: str) -> CenterAdmin:
        center_id = self.signer.verify(token)
        admin = self.repository.get(center_id)
        if admin is None:
            raise AuthenticationError("Token refers to an unknown center")
        return admin

    @staticmethod
    def to_public(admin: CenterAdmin) -> AdminPublic:
        return AdminPublic(
            center_id=admin.center_id,
            center_name=admin.center_name,
            lat=admin.lat,
            lng=admin.lng,
        )

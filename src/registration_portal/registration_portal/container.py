from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.service import AdminCredentials, AuthService
from .database.connection import DBConfig, DatabaseConnection
from .registrations.mysql_registration_repository import MySQLRegistrationRepository
from .registrations.repository import RegistrationRepository
from .registrations.service import RegistrationService
from .stats.service import StatsService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    registrations_repo: RegistrationRepository

    registration_service: RegistrationService
    stats_service: StatsService
    auth_service: AuthService


def build_container_from_repository(
    registrations_repo: RegistrationRepository,
    admin_credentials: AdminCredentials,
    *,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        conn=conn,
        registrations_repo=registrations_repo,
        registration_service=RegistrationService(registrations_repo),
        stats_service=StatsService(registrations_repo),
        auth_service=AuthService(admin_credentials),
    )


def build_container(*, db_config: dict, admin_credentials: AdminCredentials) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return build_container_from_repository(
        MySQLRegistrationRepository(conn),
        admin_credentials,
        conn=conn,
    )

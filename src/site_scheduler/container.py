from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.mysql_access_repository import MySQLAccessGrantRepository
from .access.repository import AccessGrantRepository
from .access.scope import AccessScopeResolver
from .access.service import AccessService
from .core.constants import DEFAULT_NOTIFY_SIGNATURE
from .database.connection import DBConfig, DatabaseConnection
from .notifications.dispatcher import NotificationDispatcher
from .notifications.sink import LoggingNotificationSink, NotificationSink
from .payroll.service import PayrollReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import SchedulingService
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    sites_repo: SiteRepository
    access_repo: AccessGrantRepository
    shifts_repo: ShiftRepository

    scope_resolver: AccessScopeResolver
    auth_service: AuthService
    user_service: UserService
    access_service: AccessService
    scheduling_service: SchedulingService
    payroll_report_service: PayrollReportService
    notifications: NotificationDispatcher

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    users_repo: UserRepository,
    sites_repo: SiteRepository,
    access_repo: AccessGrantRepository,
    shifts_repo: ShiftRepository,
    sink: Optional[NotificationSink] = None,
    notify_signature: str = DEFAULT_NOTIFY_SIGNATURE,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    notifications = NotificationDispatcher(
        sink or LoggingNotificationSink(),
        users_repo,
        signature=notify_signature,
    )

    return Container(
        users_repo=users_repo,
        sites_repo=sites_repo,
        access_repo=access_repo,
        shifts_repo=shifts_repo,
        scope_resolver=AccessScopeResolver(access_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        access_service=AccessService(access_repo, users_repo, sites_repo),
        scheduling_service=SchedulingService(shifts_repo, users_repo, sites_repo, events=notifications),
        payroll_report_service=PayrollReportService(shifts_repo, users_repo, sites_repo),
        notifications=notifications,
        conn=conn,
    )


def build_container(*, db_config: dict, notify_signature: str = DEFAULT_NOTIFY_SIGNATURE) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        sites_repo=MySQLSiteRepository(conn),
        access_repo=MySQLAccessGrantRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        notify_signature=notify_signature,
        conn=conn,
    )

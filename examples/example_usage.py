"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the scheduling rules live in the services.
"""

import importlib

from site_scheduler.config import get_settings_module
from site_scheduler.container import build_container
from site_scheduler.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    admin = container.scope_resolver.resolve(1, Role.ADMIN)
    for row in container.payroll_report_service.summary(actor=admin):
        print(f"{row.name:<30} {row.hours:6.2f} h  {row.pay_cents / 100:8.2f} $")


if __name__ == "__main__":
    main()

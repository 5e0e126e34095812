from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_demo_data(db_config: dict) -> dict:
    """Idempotent demo seed: three accounts, two sites, one grant, three shifts.

    Returns the demo login emails by role.
    """

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(*, name, email, password, role, employment_type, rate_cents, phone=None) -> int:
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                return int(existing["user_id"])
            cur.execute(
                """
                INSERT INTO users (name, email, phone, password_hash, role, is_active, employment_type, hourly_rate_cents)
                VALUES (%s, %s, %s, %s, %s, 1, %s, %s)
                """,
                (name, email, phone, generate_password_hash(password), role, employment_type, rate_cents),
            )
            return int(cur.lastrowid)

        def upsert_site(*, name, city, frequency, duration, notes) -> int:
            cur.execute("SELECT site_id FROM sites WHERE name=%s", (name,))
            existing = cur.fetchone()
            if existing:
                return int(existing["site_id"])
            cur.execute(
                """
                INSERT INTO sites (name, city, frequency, default_duration_min, notes)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (name, city, frequency, duration, notes),
            )
            return int(cur.lastrowid)

        admin_email = "admin@lavepropre.ca"
        sup_email = "sup@lavepropre.ca"
        emp_email = "employe1@lavepropre.ca"

        upsert_user(
            name="Admin Lave Propre",
            email=admin_email,
            password="Admin!1234",
            role="ADMIN",
            employment_type="Admin",
            rate_cents=0,
            phone="873 682 2117",
        )
        supervisor_id = upsert_user(
            name="Superviseur",
            email=sup_email,
            password="Supervisor!1234",
            role="SUPERVISOR",
            employment_type="Superviseur",
            rate_cents=0,
        )
        employee_id = upsert_user(
            name="Employé(e) 1",
            email=emp_email,
            password="Employe!1234",
            role="EMPLOYEE",
            employment_type="Temps partiel",
            rate_cents=2200,
        )

        site1 = upsert_site(
            name="AMECCI (Bureaux + Usine)",
            city="Sherbrooke",
            frequency="Hebdomadaire",
            duration=180,
            notes="Contrat récurrent, 3h",
        )
        site2 = upsert_site(
            name="Client Résidentiel (Exemple)",
            city="Sherbrooke",
            frequency="Aux 2 semaines",
            duration=150,
            notes="Résidentiel, rotation",
        )

        # Supervisor manages site1 only.
        cur.execute(
            "INSERT IGNORE INTO site_access (user_id, site_id) VALUES (%s, %s)",
            (supervisor_id, site1),
        )

        shifts = [
            (1, 17 * 60, 20 * 60, "Contrat 3h - AMECCI", "PLANNED", site1),
            (3, 9 * 60, 11 * 60 + 30, "Résidentiel - standard", "PLANNED", site2),
            (5, 17 * 60, 20 * 60, "Contrat 3h - AMECCI", "CONFIRMED", site1),
        ]
        for day, start, end, note, status, site_id in shifts:
            cur.execute(
                "SELECT shift_id FROM shifts WHERE employee_id=%s AND day_of_week=%s AND start_min=%s",
                (employee_id, day, start),
            )
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO shifts (employee_id, site_id, day_of_week, start_min, end_min, status, note)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (employee_id, site_id, day, start, end, status, note),
            )

        conn.commit()
        logger.info("Seed OK: admin=%s supervisor=%s employee=%s", admin_email, sup_email, emp_email)
        return {"ADMIN": admin_email, "SUPERVISOR": sup_email, "EMPLOYEE": emp_email}
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

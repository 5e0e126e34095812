from __future__ import annotations

from typing import Optional, Sequence

from ..access.scope import AllSites, GrantedSites, OwnRecordsOnly, Scope
from ..core.enums import ShiftStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, in_transaction, transaction
from .model import NewShift, Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, employee_id, site_id, day_of_week, start_min, end_min, status, note"
_UPDATABLE = ("employee_id", "site_id", "day_of_week", "start_min", "end_min", "status", "note")


def _to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        employee_id=int(r["employee_id"]),
        site_id=int(r["site_id"]),
        day_of_week=int(r["day_of_week"]),
        start_min=int(r["start_min"]),
        end_min=int(r["end_min"]),
        status=ShiftStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def atomic(self):
        return transaction(self._conn_factory)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def find_by_employee_day(
        self,
        *,
        employee_id: int,
        day_of_week: int,
        exclude_id: Optional[int] = None,
    ) -> Sequence[Shift]:
        sql = f"SELECT {_COLUMNS} FROM shifts WHERE employee_id=%s AND day_of_week=%s"
        params: list[object] = [int(employee_id), int(day_of_week)]
        if exclude_id is not None:
            sql += " AND shift_id<>%s"
            params.append(int(exclude_id))
        sql += " ORDER BY start_min"
        # Inside atomic() the rows (and the index gap) stay locked until commit,
        # so a concurrent writer on the same employee/day waits for us.
        if in_transaction(self._conn_factory):
            sql += " FOR UPDATE"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_shift(r) for r in fetchall(cur)]

    def create(self, shift: NewShift) -> Shift:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, site_id, day_of_week, start_min, end_min, status, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(shift.employee_id),
                    int(shift.site_id),
                    int(shift.day_of_week),
                    int(shift.start_min),
                    int(shift.end_min),
                    ShiftStatus(shift.status).value,
                    shift.note,
                ),
            )
            shift_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (shift_id,))
            return _to_shift(fetchone(cur))

    def update(self, shift_id: int, fields: dict) -> Optional[Shift]:
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Unknown shift fields: {sorted(unknown)}")

        with db_cursor(self._conn_factory) as (_, cur):
            if fields:
                assignments = ", ".join(f"{name}=%s" for name in fields)
                values = [v.value if isinstance(v, ShiftStatus) else v for v in fields.values()]
                cur.execute(
                    f"UPDATE shifts SET {assignments} WHERE shift_id=%s",
                    (*values, int(shift_id)),
                )
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def delete(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0

    def find_visible(self, scope: Scope) -> Sequence[Shift]:
        sql = f"SELECT {_COLUMNS} FROM shifts"
        params: tuple = ()
        if isinstance(scope, GrantedSites):
            if not scope.site_ids:
                return []
            site_ids = sorted(scope.site_ids)
            sql += f" WHERE site_id IN ({in_clause(site_ids)})"
            params = tuple(site_ids)
        elif isinstance(scope, OwnRecordsOnly):
            sql += " WHERE employee_id=%s"
            params = (int(scope.user_id),)
        elif not isinstance(scope, AllSites):
            raise TypeError(f"Unsupported scope: {scope!r}")
        sql += " ORDER BY day_of_week ASC, start_min ASC, shift_id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_shift(r) for r in fetchall(cur)]

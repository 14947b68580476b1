from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AgeGroup, Emirate, ResidencePlace, SortField, SortOrder
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone, like_pattern
from .model import Registration, RegistrationInput, RegistrationTotals
from .repository import RegistrationRepository
from .validation import check_in_bounds_error

_COLUMNS = """
    registration_id, name, age_group, father_husband_name, house_name, email,
    mobile_country_code, mobile_number, whatsapp_country_code, whatsapp_number,
    residing_emirate, location_if_other, place_of_residence,
    adults_count, children_count, is_checked_in, checked_in_adults, checked_in_children,
    created_at, updated_at
"""

_SEARCH_COLUMNS = (
    "name",
    "house_name",
    "mobile_number",
    "mobile_country_code",
    "residing_emirate",
    "place_of_residence",
)


def _row_to_registration(r: Dict[str, Any]) -> Registration:
    return Registration(
        registration_id=r["registration_id"],
        name=r["name"],
        age_group=AgeGroup(r["age_group"]),
        father_husband_name=r["father_husband_name"],
        house_name=r["house_name"],
        email=r.get("email"),
        mobile_country_code=r["mobile_country_code"],
        mobile_number=r["mobile_number"],
        whatsapp_country_code=r.get("whatsapp_country_code"),
        whatsapp_number=r.get("whatsapp_number"),
        residing_emirate=Emirate(r["residing_emirate"]),
        location_if_other=r.get("location_if_other"),
        place_of_residence=ResidencePlace(r["place_of_residence"]),
        adults_count=int(r["adults_count"]),
        children_count=int(r["children_count"]),
        is_checked_in=bool(r.get("is_checked_in")),
        checked_in_adults=int(r.get("checked_in_adults") or 0),
        checked_in_children=int(r.get("checked_in_children") or 0),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
    )


def _where_clause(search: Optional[str], is_checked_in: Optional[bool]) -> tuple[str, list[object]]:
    conditions: list[str] = []
    params: list[object] = []

    term = (search or "").strip()
    if term:
        pattern = like_pattern(term.lower())
        conditions.append("(" + " OR ".join(f"LOWER({col}) LIKE %s" for col in _SEARCH_COLUMNS) + ")")
        params.extend([pattern] * len(_SEARCH_COLUMNS))

    if is_checked_in is not None:
        conditions.append("is_checked_in = %s")
        params.append(1 if is_checked_in else 0)

    if not conditions:
        return "", []
    return "WHERE " + " AND ".join(conditions), params


def _order_clause(sort_field: SortField, sort_order: SortOrder) -> str:
    direction = "ASC" if sort_order == SortOrder.ASC else "DESC"
    # Tie-break on the primary key so pagination is stable.
    return f"ORDER BY {sort_field.column} {direction}, registration_id {direction}"


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registrations WHERE registration_id=%s", (registration_id,))
            row = fetchone(cur)
            return _row_to_registration(row) if row else None

    def find_by_mobile(self, country_code: str, number: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM registrations
                WHERE mobile_country_code=%s AND mobile_number=%s
                """,
                (country_code, number),
            )
            row = fetchone(cur)
            return _row_to_registration(row) if row else None

    def find_by_email(self, email: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registrations WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_registration(row) if row else None

    def create(self, data: RegistrationInput) -> Registration:
        registration_id = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO registrations(
                        registration_id, name, age_group, father_husband_name, house_name, email,
                        mobile_country_code, mobile_number, whatsapp_country_code, whatsapp_number,
                        residing_emirate, location_if_other, place_of_residence,
                        adults_count, children_count, is_checked_in, checked_in_adults, checked_in_children
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,0,0,0)
                    """,
                    (
                        registration_id,
                        data.name,
                        data.age_group.value,
                        data.father_husband_name,
                        data.house_name,
                        data.email,
                        data.mobile_country_code,
                        data.mobile_number,
                        data.whatsapp_country_code,
                        data.whatsapp_number,
                        data.residing_emirate.value,
                        data.location_if_other,
                        data.place_of_residence.value,
                        int(data.adults_count),
                        int(data.children_count),
                    ),
                )
        except mysql.connector.IntegrityError as e:
            key = duplicate_key_name(e)
            if key is None:
                raise
            if "email" in key:
                raise ConflictError("This email address is already registered.", field="email") from e
            raise ConflictError(
                "A registration with this mobile number already exists.", field="mobileNumber"
            ) from e

        created = self.get_by_id(registration_id)
        if created is None:
            raise RuntimeError(f"Registration {registration_id} vanished after insert")
        return created

    def list_page(
        self,
        *,
        search: Optional[str],
        sort_field: SortField,
        sort_order: SortOrder,
        offset: int,
        limit: int,
        is_checked_in: Optional[bool] = None,
    ) -> tuple[Sequence[Registration], int]:
        where, params = _where_clause(search, is_checked_in)
        order = _order_clause(sort_field, sort_order)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM registrations {where}", tuple(params))
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"SELECT {_COLUMNS} FROM registrations {where} {order} LIMIT %s OFFSET %s",
                tuple(params) + (int(limit), int(offset)),
            )
            rows = fetchall(cur)
            return [_row_to_registration(r) for r in rows], total

    def list_all(
        self,
        *,
        search: Optional[str],
        sort_field: SortField,
        sort_order: SortOrder,
        is_checked_in: Optional[bool] = None,
    ) -> Sequence[Registration]:
        where, params = _where_clause(search, is_checked_in)
        order = _order_clause(sort_field, sort_order)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM registrations {where} {order}", tuple(params))
            return [_row_to_registration(r) for r in fetchall(cur)]

    def search_not_checked_in(self, *, name_term: str, limit: int) -> Sequence[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM registrations
                WHERE is_checked_in=0 AND LOWER(name) LIKE %s
                ORDER BY name ASC
                LIMIT %s
                """,
                (like_pattern(name_term.strip().lower()), int(limit)),
            )
            return [_row_to_registration(r) for r in fetchall(cur)]

    def update_check_in(
        self,
        registration_id: str,
        *,
        is_checked_in: bool,
        checked_in_adults: int,
        checked_in_children: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Bounds repeated in SQL so a concurrent edit can never break the invariant.
            cur.execute(
                """
                UPDATE registrations
                SET is_checked_in=%s, checked_in_adults=%s, checked_in_children=%s
                WHERE registration_id=%s AND adults_count >= %s AND children_count >= %s
                """,
                (
                    1 if is_checked_in else 0,
                    int(checked_in_adults),
                    int(checked_in_children),
                    registration_id,
                    int(checked_in_adults),
                    int(checked_in_children),
                ),
            )
            if cur.rowcount > 0:
                return True

            # 0 affected rows: missing id, unchanged values, or the bounds guard refused the update.
            cur.execute(
                "SELECT adults_count, children_count FROM registrations WHERE registration_id=%s",
                (registration_id,),
            )
            row = fetchone(cur)
            if row is None:
                return False
            error = check_in_bounds_error(
                adults=int(checked_in_adults),
                children=int(checked_in_children),
                registered_adults=int(row["adults_count"]),
                registered_children=int(row["children_count"]),
            )
            if error:
                raise error
            return True

    def delete_by_id(self, registration_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM registrations WHERE registration_id=%s", (registration_id,))
            return cur.rowcount > 0

    def totals(self) -> RegistrationTotals:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    COUNT(*) AS total_registrations,
                    COALESCE(SUM(adults_count), 0) AS total_adults,
                    COALESCE(SUM(children_count), 0) AS total_children,
                    COALESCE(SUM(is_checked_in = 1), 0) AS checked_in_registrations,
                    COALESCE(SUM(CASE WHEN is_checked_in = 1 THEN checked_in_adults ELSE 0 END), 0) AS checked_in_adults,
                    COALESCE(SUM(CASE WHEN is_checked_in = 1 THEN checked_in_children ELSE 0 END), 0) AS checked_in_children
                FROM registrations
                """
            )
            r = fetchone(cur) or {}
            return RegistrationTotals(
                total_registrations=int(r.get("total_registrations") or 0),
                total_adults=int(r.get("total_adults") or 0),
                total_children=int(r.get("total_children") or 0),
                checked_in_registrations=int(r.get("checked_in_registrations") or 0),
                checked_in_adults=int(r.get("checked_in_adults") or 0),
                checked_in_children=int(r.get("checked_in_children") or 0),
            )

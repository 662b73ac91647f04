"""
Allow-list of tables reachable through the CRUD routes.

Table and column names from this registry are interpolated into SQL text
(identifiers cannot be bound as parameters), so callers must resolve the
requested name here before building any statement.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, status

UNKNOWN_TABLE_MESSAGE = "Table inconnue. Utiliser project ou skill."


@dataclass(frozen=True)
class TableMeta:
    name: str
    id_key: str
    order_column: str


TABLES: dict[str, TableMeta] = {
    "project": TableMeta(name="project", id_key="id_project", order_column="created_at"),
    "skill": TableMeta(name="skill", id_key="id_skill", order_column="id_skill"),
}


def get_table_meta(table_name: object) -> TableMeta:
    if not isinstance(table_name, str) or table_name not in TABLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=UNKNOWN_TABLE_MESSAGE,
        )
    return TABLES[table_name]

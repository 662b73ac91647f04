"""
Portfolio persistence (raw SQL).

Identifiers come from `tables.TABLES`; every value is a bound parameter.
"""

from __future__ import annotations

from core.db import Database

from .tables import TableMeta


async def get_row(db: Database, meta: TableMeta, row_id: int) -> list[dict]:
    return await db.fetch_all(
        f"SELECT * FROM {meta.name} WHERE {meta.id_key} = $1",
        row_id,
    )


async def list_rows(db: Database, meta: TableMeta) -> list[dict]:
    return await db.fetch_all(
        f"SELECT * FROM {meta.name} ORDER BY {meta.order_column} DESC"
    )


async def insert_project(
    db: Database,
    *,
    title: object,
    status: object,
    description: object,
    url: str,
    technologies: list[str],
    demo: object,
    github: object,
) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO project (title, status, description, url, technologie, demo, github)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING *
        """,
        title,
        status,
        description,
        url,
        technologies,
        demo,
        github,
    )
    if row is None:
        raise RuntimeError("Failed to insert project.")
    return row


async def insert_skill(db: Database, *, name: object, category: object, level: int) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO skill (name, categorie, level)
        VALUES ($1, $2, $3)
        RETURNING *
        """,
        name,
        category,
        level,
    )
    if row is None:
        raise RuntimeError("Failed to insert skill.")
    return row


async def update_project(
    db: Database,
    project_id: int,
    *,
    title: object,
    status: object,
    description: object,
    url: str,
    technologies: list[str],
    demo: object,
    github: object,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE project
        SET title = $1,
            status = $2,
            description = $3,
            url = $4,
            technologie = $5,
            demo = $6,
            github = $7
        WHERE id_project = $8
        RETURNING *
        """,
        title,
        status,
        description,
        url,
        technologies,
        demo,
        github,
        project_id,
    )


async def update_skill(
    db: Database,
    skill_id: int,
    *,
    name: object,
    category: object,
    level: int,
) -> dict | None:
    return await db.fetch_one(
        """
        UPDATE skill
        SET name = $1,
            categorie = $2,
            level = $3
        WHERE id_skill = $4
        RETURNING *
        """,
        name,
        category,
        level,
        skill_id,
    )


async def delete_row(db: Database, meta: TableMeta, row_id: int) -> bool:
    row = await db.fetch_one(
        f"DELETE FROM {meta.name} WHERE {meta.id_key} = $1 RETURNING {meta.id_key}",
        row_id,
    )
    return row is not None

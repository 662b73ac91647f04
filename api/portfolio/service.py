"""
Portfolio business logic.

Each operation validates the table name first, then the request fields, then
runs exactly one SQL statement. Database failures are logged and mapped to a
generic message per operation; driver details never reach the client.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import asyncpg
from fastapi import HTTPException, status

from core.db import Database

from . import repository
from .normalize import clamp_percent, normalize_technologies, normalize_url, text_or_empty
from .tables import get_table_meta

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = "Erreur lors de la récupération des données."
CREATE_ERROR_MESSAGE = "Erreur lors de la création."
UPDATE_ERROR_MESSAGE = "Erreur lors de la mise à jour."
DELETE_ERROR_MESSAGE = "Erreur lors de la suppression."
DUPLICATE_TITLE_MESSAGE = "Un projet avec ce titre existe déjà."
INVALID_DATA_MESSAGE = 'Payload "data" manquant ou invalide.'
MISSING_ID_MESSAGE = 'Champ "id" requis.'
INVALID_ID_MESSAGE = 'Champ "id" invalide.'
NOT_FOUND_MESSAGE = "Entrée introuvable."


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _require_data(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise _bad_request(INVALID_DATA_MESSAGE)
    return data


def _require_id(value: Any) -> int:
    if value is None:
        raise _bad_request(MISSING_ID_MESSAGE)
    if isinstance(value, bool):
        raise _bad_request(INVALID_ID_MESSAGE)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise _bad_request(INVALID_ID_MESSAGE) from None
    if not math.isfinite(number) or not number.is_integer():
        raise _bad_request(INVALID_ID_MESSAGE)
    return int(number)


def _project_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": data.get("title"),
        "status": data.get("status"),
        "description": data.get("description"),
        "url": normalize_url(data.get("url")),
        "technologies": normalize_technologies(data.get("technologie")),
        "demo": text_or_empty(data.get("demo")),
        "github": text_or_empty(data.get("github")),
    }


def _skill_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": data.get("name"),
        "category": data.get("categorie"),
        "level": clamp_percent(data.get("level")),
    }


async def get_data(db: Database, *, table: Any, row_id: Any = None) -> list[dict]:
    """
    Rows of `table`: one lookup by primary key when `row_id` is given (still a
    list, empty when nothing matches), otherwise the whole table newest first.

    A blank `id` query value looks up primary key 0.
    """
    meta = get_table_meta(table)
    if row_id is not None:
        row_id = 0 if isinstance(row_id, str) and not row_id.strip() else _require_id(row_id)
    try:
        if row_id is not None:
            return await repository.get_row(db, meta, row_id)
        return await repository.list_rows(db, meta)
    except Exception as exc:
        logger.exception("get_data_failed table=%s id=%s", meta.name, row_id)
        raise HTTPException(status_code=500, detail=READ_ERROR_MESSAGE) from exc


async def add_data(db: Database, *, table: Any, data: Any) -> dict:
    meta = get_table_meta(table)
    data = _require_data(data)

    try:
        if meta.name == "project":
            return await repository.insert_project(db, **_project_fields(data))
        return await repository.insert_skill(db, **_skill_fields(data))
    except asyncpg.UniqueViolationError as exc:
        if meta.name == "project":
            logger.info("duplicate_project_title title=%s", data.get("title"))
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_TITLE_MESSAGE) from exc
        logger.exception("add_data_failed table=%s", meta.name)
        raise HTTPException(status_code=500, detail=CREATE_ERROR_MESSAGE) from exc
    except Exception as exc:
        logger.exception("add_data_failed table=%s", meta.name)
        raise HTTPException(status_code=500, detail=CREATE_ERROR_MESSAGE) from exc


async def update_data(db: Database, *, table: Any, row_id: Any, data: Any) -> dict:
    """
    Full-row replace: fields missing from `data` are written as their
    normalized empty value, not kept from the existing row.
    """
    meta = get_table_meta(table)
    row_id = _require_id(row_id)
    data = _require_data(data)

    try:
        if meta.name == "project":
            row = await repository.update_project(db, row_id, **_project_fields(data))
        else:
            row = await repository.update_skill(db, row_id, **_skill_fields(data))
    except Exception as exc:
        logger.exception("update_data_failed table=%s id=%s", meta.name, row_id)
        raise HTTPException(status_code=500, detail=UPDATE_ERROR_MESSAGE) from exc

    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return row


async def delete_data(db: Database, *, table: Any, row_id: Any) -> dict:
    meta = get_table_meta(table)
    row_id = _require_id(row_id)

    try:
        deleted = await repository.delete_row(db, meta, row_id)
    except Exception as exc:
        logger.exception("delete_data_failed table=%s id=%s", meta.name, row_id)
        raise HTTPException(status_code=500, detail=DELETE_ERROR_MESSAGE) from exc

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entrée {row_id} introuvable pour {meta.name}.",
        )
    return {"success": True, "removedId": row_id}

"""
Portfolio CRUD endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.get("/getData")
async def get_data(
    table: str | None = Query(default=None),
    id: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> list[dict]:
    return await service.get_data(db, table=table, row_id=id)


@router.post("/addData", status_code=status.HTTP_201_CREATED)
async def add_data(
    request: schemas.AddDataRequest | None = None,
    db: Database = Depends(get_db),
) -> dict:
    request = request or schemas.AddDataRequest()
    return await service.add_data(db, table=request.table, data=request.data)


@router.put("/updateData")
async def update_data(
    request: schemas.UpdateDataRequest | None = None,
    db: Database = Depends(get_db),
) -> dict:
    request = request or schemas.UpdateDataRequest()
    return await service.update_data(db, table=request.table, row_id=request.id, data=request.data)


@router.delete("/deleteData")
async def delete_data(
    request: schemas.DeleteDataRequest | None = None,
    db: Database = Depends(get_db),
) -> dict:
    request = request or schemas.DeleteDataRequest()
    return await service.delete_data(db, table=request.table, row_id=request.id)

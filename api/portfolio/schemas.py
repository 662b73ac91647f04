"""
Pydantic schemas for the portfolio CRUD routes.

Fields are intentionally untyped: the service layer validates them so that
error messages stay the ones clients already rely on.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class AddDataRequest(BaseModel):
    table: Any = None
    data: Any = None


class UpdateDataRequest(BaseModel):
    table: Any = None
    id: Any = None
    data: Any = None


class DeleteDataRequest(BaseModel):
    table: Any = None
    id: Any = None


"""Tests for the table allow-list."""

import pytest
from fastapi import HTTPException

from portfolio.tables import UNKNOWN_TABLE_MESSAGE, get_table_meta


def test_known_tables():
    assert get_table_meta("project").id_key == "id_project"
    assert get_table_meta("project").order_column == "created_at"
    assert get_table_meta("skill").id_key == "id_skill"
    assert get_table_meta("skill").order_column == "id_skill"


@pytest.mark.parametrize(
    "name",
    [None, "", "users", "Project", "project ", "projects", "skill; DROP TABLE skill", 1, ["project"]],
)
def test_unknown_tables_rejected(name):
    with pytest.raises(HTTPException) as excinfo:
        get_table_meta(name)
    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == UNKNOWN_TABLE_MESSAGE

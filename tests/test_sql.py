"""
Tests for sql.py - partial update and WHERE clause builders.
"""

import pytest

from jobly.errors import BadRequestError
from jobly.sql import WhereClause, sql_for_partial_update


class TestPartialUpdate:
    """Test SET clause generation."""

    def test_aliases_and_positions(self):
        """Aliased keys use the column name; positions follow key order."""
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )
        assert set_cols == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_single_key(self):
        result = sql_for_partial_update({"title": "Manager"}, {})
        assert result.set_cols == '"title"=$1'
        assert result.values == ["Manager"]

    def test_values_align_with_placeholders(self):
        """The i-th value binds to $i for every key."""
        data = {"a": 1, "b": None, "c": "x", "d": 4.5}
        set_cols, values = sql_for_partial_update(data, {"c": "col_c"})

        assert len(values) == len(data)
        for i, (frag, key) in enumerate(zip(set_cols.split(", "), data), start=1):
            assert frag.endswith(f"=${i}")
            assert values[i - 1] == data[key]

    @pytest.mark.parametrize("aliases", [{}, {"numEmployees": "num_employees"}])
    def test_empty_data_fails(self, aliases):
        """No keys means no update."""
        with pytest.raises(BadRequestError) as exc:
            sql_for_partial_update({}, aliases)
        assert exc.value.status == 400
        assert exc.value.message == "No data"

    def test_input_not_mutated(self):
        data = {"name": "New"}
        sql_for_partial_update(data, {})
        assert data == {"name": "New"}


class TestWhereClause:
    """Test predicate accumulation."""

    def test_single_fragment_unjoined(self):
        where = WhereClause()
        where.add("salary >= {param}", 10)
        assert where.render() == "salary >= $1"
        assert where.values == [10]

    def test_fragments_joined_with_and(self):
        where = WhereClause()
        where.add("LOWER(title) LIKE '%' || LOWER({param}) || '%'", "eng")
        where.add("salary >= {param}", 10)
        where.add("equity > {param}", 0)

        assert len(where) == 3
        assert where.render() == (
            "LOWER(title) LIKE '%' || LOWER($1) || '%' AND salary >= $2 AND equity > $3"
        )
        assert where.values == ["eng", 10, 0]

    def test_empty_clause_rejected(self):
        """No predicates must not produce a dangling WHERE."""
        with pytest.raises(BadRequestError):
            WhereClause().render()

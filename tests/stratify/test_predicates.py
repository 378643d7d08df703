"""
조건 적용기 테스트
"""
from typing import Any

import pytest

from views_stratify.core.interfaces import (
    ArgumentHandler,
    ConditionalQuery,
    InheritedFilters,
    WhereCondition,
)
from views_stratify.stratify.predicates import (
    apply_exclusive_filter,
    apply_inherited_filters,
    apply_remainder_filter,
    base_field,
)
from views_stratify.views.query import SqlQuery


class RecordingQuery(ConditionalQuery):
    """add_where 호출만 기록하는 쿼리"""

    def __init__(self):
        self.where: list[WhereCondition] = []

    def add_where(self, group: int, field: str, value: Any = None, operator: str | None = None) -> None:
        self.where.append(WhereCondition(group, field, value, operator))


class PlainQuery:
    """raw 조건 주입을 지원하지 않는 백엔드"""

    def __init__(self):
        self.calls = []

    def add_where(self, *args):
        # 인터페이스를 구현하지 않았으므로 호출되면 안 됨
        self.calls.append(args)


class TestBaseField:
    """base_field 매핑 테스트"""

    @pytest.mark.parametrize("table,expected", [
        ("node_field_data", "nid"),
        ("users_field_data", "uid"),
        ("taxonomy_term_field_data", "tid"),
        ("media_field_data", "mid"),
        ("comment_field_data", "cid"),
        ("unknown_table", "id"),
        ("", "id"),
    ])
    def test_mapping(self, table, expected):
        assert base_field(table) == expected


class TestExclusiveFilter:
    """exclusive 조건 테스트"""

    def test_non_empty_ids(self):
        query = RecordingQuery()
        assert apply_exclusive_filter(query, "node_field_data", [2, 5]) is True

        assert query.where == [WhereCondition(0, "node_field_data.nid", [2, 5], "IN")]

    def test_empty_ids_adds_contradiction(self):
        """빈 목록 → IS NULL + IS NOT NULL"""
        query = RecordingQuery()
        apply_exclusive_filter(query, "users_field_data", [])

        assert [(c.field, c.operator) for c in query.where] == [
            ("users_field_data.uid", "IS NULL"),
            ("users_field_data.uid", "IS NOT NULL"),
        ]
        assert all(c.group == 0 for c in query.where)

    def test_unsupported_backend_is_noop(self):
        query = PlainQuery()
        assert apply_exclusive_filter(query, "node_field_data", [1]) is False
        assert apply_exclusive_filter(query, "node_field_data", []) is False
        assert query.calls == []


class TestRemainderFilter:
    """remainder 조건 테스트"""

    def test_non_empty_ids(self):
        query = RecordingQuery()
        assert apply_remainder_filter(query, "node_field_data", [2, 5]) is True

        assert query.where == [WhereCondition(0, "node_field_data.nid", [2, 5], "NOT IN")]

    def test_empty_ids_is_noop(self):
        """빈 목록 → 조건 없음 (전체 표시)"""
        query = RecordingQuery()
        assert apply_remainder_filter(query, "node_field_data", []) is False
        assert query.where == []

    def test_unsupported_backend_is_noop(self):
        query = PlainQuery()
        assert apply_remainder_filter(query, "node_field_data", [1]) is False
        assert query.calls == []


class TestInheritedFilters:
    """상속 필터 적용 테스트"""

    def test_positional_binding(self):
        query = RecordingQuery()
        inherited = InheritedFilters(
            handlers=[ArgumentHandler("uid", "node_field_data"), ArgumentHandler("type", "node_field_data")],
            args=[7, "article"],
        )

        assert apply_inherited_filters(query, "node_field_data", inherited) == 2
        assert query.where == [
            WhereCondition(0, "node_field_data.uid", 7, "="),
            WhereCondition(0, "node_field_data.type", "article", "="),
        ]

    def test_missing_arguments_skip_handlers(self):
        query = RecordingQuery()
        inherited = InheritedFilters(
            handlers=[ArgumentHandler("uid"), ArgumentHandler("type")],
            args=[7],
        )

        assert apply_inherited_filters(query, "node_field_data", inherited) == 1

    def test_unsupported_backend(self):
        inherited = InheritedFilters(handlers=[ArgumentHandler("uid")], args=[7])
        assert apply_inherited_filters(PlainQuery(), "node_field_data", inherited) == 0


class TestAgainstDatabase:
    """실제 SQL 쿼리에 대한 결과 검증"""

    def test_empty_exclusive_yields_zero_rows(self, seeded_db):
        query = SqlQuery("node_field_data", seeded_db)
        apply_exclusive_filter(query, "node_field_data", [])

        assert query.execute() == []
        assert query.count() == 0

    def test_empty_remainder_yields_everything(self, seeded_db):
        query = SqlQuery("node_field_data", seeded_db)
        apply_remainder_filter(query, "node_field_data", [])

        assert [row["nid"] for row in query.execute()] == [1, 2, 3, 4, 5]

    def test_exclusive_and_remainder_partition(self, seeded_db):
        exclusive = SqlQuery("node_field_data", seeded_db)
        remainder = SqlQuery("node_field_data", seeded_db)
        apply_exclusive_filter(exclusive, "node_field_data", [2, 5])
        apply_remainder_filter(remainder, "node_field_data", [2, 5])

        assert [row["nid"] for row in exclusive.execute()] == [2, 5]
        assert [row["nid"] for row in remainder.execute()] == [1, 3, 4]

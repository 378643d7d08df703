"""
SQL 쿼리 플러그인

뷰 디스플레이 설정을 SQLAlchemy Select로 조립하고 실행
"""
from typing import Any, Callable

from sqlalchemy import Column, Table, and_, func, select
from sqlalchemy.sql import Select

from views_stratify.core import models  # noqa: F401  (테이블 metadata 등록)
from views_stratify.core.database import Base, DatabaseManager
from views_stratify.core.exceptions import QueryError
from views_stratify.core.interfaces import ConditionalQuery, QueryPlugin, WhereCondition

# 연산자 → SQLAlchemy 표현식 생성기
OPERATORS: dict[str, Callable[[Column, Any], Any]] = {
    "=": lambda col, value: col == value,
    "!=": lambda col, value: col != value,
    "<>": lambda col, value: col != value,
    "<": lambda col, value: col < value,
    "<=": lambda col, value: col <= value,
    ">": lambda col, value: col > value,
    ">=": lambda col, value: col >= value,
    "IN": lambda col, value: col.in_(list(value)),
    "NOT IN": lambda col, value: col.not_in(list(value)),
    "IS NULL": lambda col, value: col.is_(None),
    "IS NOT NULL": lambda col, value: col.is_not(None),
    "LIKE": lambda col, value: col.like(value),
}


class SqlQuery(QueryPlugin, ConditionalQuery):
    """
    SQL 쿼리 플러그인

    사용법:
        query = SqlQuery("node_field_data", db)
        query.add_where(0, "node_field_data.tag", "Featured", "=")
        rows = query.execute()
    """

    def __init__(self, base_table: str, db: DatabaseManager, sort: list[str] | None = None):
        table = Base.metadata.tables.get(base_table)
        if table is None:
            raise QueryError(f"알 수 없는 base table: {base_table}")

        self._base_table = base_table
        self.table: Table = table
        self.db = db
        self.sort = list(sort or [])
        self.where: list[WhereCondition] = []

    @property
    def base_table(self) -> str:
        return self._base_table

    @property
    def primary_key(self) -> str:
        """base table의 기본키 컬럼명"""
        return next(iter(self.table.primary_key.columns)).name

    def add_where(
        self,
        group: int,
        field: str,
        value: Any = None,
        operator: str | None = None,
    ) -> None:
        """
        WHERE 조건 추가

        Args:
            group: 조건 그룹 (그룹 내/그룹 간 모두 AND)
            field: "table.column" 또는 "column"
            value: 비교 값 (IN/NOT IN은 리스트)
            operator: 연산자 (없으면 값이 리스트일 때 IN, 아니면 =)
        """
        if operator is None:
            operator = "IN" if isinstance(value, (list, tuple, set)) else "="
        operator = operator.upper()
        if operator not in OPERATORS:
            raise QueryError(f"지원하지 않는 연산자: {operator}", {"field": field})

        # 컬럼 존재 여부는 조건 추가 시점에 검증
        self._column(field)
        self.where.append(WhereCondition(group=group, field=field, value=value, operator=operator))

    def _column(self, field: str) -> Column:
        table_name, _, column_name = field.rpartition(".")
        if table_name and table_name != self._base_table:
            raise QueryError(
                f"base table 외 컬럼은 지원하지 않습니다: {field}",
                {"base_table": self._base_table},
            )
        column = self.table.columns.get(column_name)
        if column is None:
            raise QueryError(f"알 수 없는 컬럼: {field}")
        return column

    def _where_clause(self):
        clauses = [
            OPERATORS[condition.operator](self._column(condition.field), condition.value)
            for condition in sorted(self.where, key=lambda c: c.group)
        ]
        return and_(*clauses) if clauses else None

    def to_select(self) -> Select:
        """조건/정렬을 반영한 Select 생성"""
        stmt = select(self.table)
        clause = self._where_clause()
        if clause is not None:
            stmt = stmt.where(clause)

        order_by = []
        for item in self.sort:
            descending = item.startswith("-")
            column = self._column(item.lstrip("-"))
            order_by.append(column.desc() if descending else column.asc())
        # 결과 순서 고정
        order_by.append(self.table.columns[self.primary_key].asc())
        return stmt.order_by(*order_by)

    def execute(self) -> list[dict[str, Any]]:
        """쿼리 실행"""
        stmt = self.to_select()
        with self.db.session() as session:
            return [dict(row) for row in session.execute(stmt).mappings().all()]

    def count(self) -> int:
        """조건을 만족하는 전체 행 수 (페이저용)"""
        stmt = select(func.count()).select_from(self.to_select().order_by(None).subquery())
        with self.db.session() as session:
            return session.execute(stmt).scalar_one()

    def __repr__(self) -> str:
        return f"<SqlQuery {self._base_table} where={len(self.where)}>"

"""
조건 적용기

선택된 ID 목록을 호출자 쿼리의 IN / NOT IN 조건으로 변환
"""
from typing import Any, Sequence

from views_stratify.core.interfaces import ConditionalQuery, InheritedFilters

# base table → ID 컬럼
BASE_FIELD_MAP = {
    "node_field_data": "nid",
    "users_field_data": "uid",
    "taxonomy_term_field_data": "tid",
    "media_field_data": "mid",
    "comment_field_data": "cid",
}
DEFAULT_BASE_FIELD = "id"

WHERE_GROUP = 0


def base_field(base_table: str) -> str:
    """base table의 ID 컬럼명 (모르는 테이블은 id)"""
    return BASE_FIELD_MAP.get(base_table, DEFAULT_BASE_FIELD)


def apply_exclusive_filter(query: Any, base_table: str, entity_ids: Sequence[Any]) -> bool:
    """
    선택된 엔티티만 남기는 조건 추가

    ID가 비어 있으면 IS NULL + IS NOT NULL 모순 조건을 넣어 0건을 보장한다.
    (쿼리를 건너뛰지 않으므로 페이저/카운트도 같은 0건 조건으로 동작)

    Returns:
        조건을 추가했으면 True, 지원하지 않는 백엔드면 False
    """
    if not isinstance(query, ConditionalQuery):
        return False

    column = f"{base_table}.{base_field(base_table)}"
    if not entity_ids:
        query.add_where(WHERE_GROUP, column, None, "IS NULL")
        query.add_where(WHERE_GROUP, column, None, "IS NOT NULL")
    else:
        query.add_where(WHERE_GROUP, column, list(entity_ids), "IN")
    return True


def apply_remainder_filter(query: Any, base_table: str, entity_ids: Sequence[Any]) -> bool:
    """
    선택된 엔티티를 제외하는 조건 추가

    ID가 비어 있으면 아무 조건도 넣지 않는다 (전체 표시).

    Returns:
        조건을 추가했으면 True
    """
    if not isinstance(query, ConditionalQuery):
        return False
    if not entity_ids:
        return False

    column = f"{base_table}.{base_field(base_table)}"
    query.add_where(WHERE_GROUP, column, list(entity_ids), "NOT IN")
    return True


def apply_inherited_filters(query: Any, base_table: str, inherited: InheritedFilters) -> int:
    """
    상속된 컨텍스트 필터 적용

    핸들러 i번째 컬럼 = args[i] (인자가 모자라면 남은 핸들러는 건너뜀)

    Returns:
        추가된 조건 수
    """
    if not isinstance(query, ConditionalQuery):
        return 0

    applied = 0
    for handler, arg in zip(inherited.handlers, inherited.args):
        query.add_where(WHERE_GROUP, f"{base_table}.{handler.field}", arg, "=")
        applied += 1
    return applied

"""
디스플레이 분류기

디스플레이 머신 이름의 마커로 계층화 역할을 판정 (순수 함수)
"""
from views_stratify.core.exceptions import ConfigurationConflictError
from views_stratify.core.interfaces import DisplayRole

# 마커는 이름 어디에 있어도 됨 (접두/접미/중간) - 부분 문자열 매칭
EXCLUSIVE_MARKER = "exclusive_rows"
REMAINDER_MARKER = "remainder_rows"

# 선택 쿼리를 정의하는 디스플레이 이름과 필수 플러그인 타입
SELECTION_DISPLAY = "embed_stratify_query"
SELECTION_PLUGIN = "embed"


def is_exclusive_display(display_id: str) -> bool:
    """exclusive_rows 마커 포함 여부"""
    return EXCLUSIVE_MARKER in display_id


def is_remainder_display(display_id: str) -> bool:
    """remainder_rows 마커 포함 여부"""
    return REMAINDER_MARKER in display_id


def validate_display(display_id: str) -> None:
    """
    마커 충돌 검증

    Raises:
        ConfigurationConflictError: 두 마커가 동시에 존재
    """
    if is_exclusive_display(display_id) and is_remainder_display(display_id):
        raise ConfigurationConflictError(display_id)


def classify_display(display_id: str) -> DisplayRole:
    """
    디스플레이 역할 판정

    Examples:
        >>> classify_display("block_exclusive_rows_full")
        <DisplayRole.EXCLUSIVE: 'exclusive'>
        >>> classify_display("embed_stratify_query")
        <DisplayRole.UNCLASSIFIED: 'unclassified'>
    """
    exclusive = is_exclusive_display(display_id)
    remainder = is_remainder_display(display_id)

    if exclusive and remainder:
        return DisplayRole.CONFLICT
    if exclusive:
        return DisplayRole.EXCLUSIVE
    if remainder:
        return DisplayRole.REMAINDER
    return DisplayRole.UNCLASSIFIED

"""
커스텀 예외 클래스 정의

뷰 엔진과 계층화(stratify) 엔진에서 사용하는 표준화된 예외
"""
from typing import Any


class BaseError(Exception):
    """모든 커스텀 예외의 기본 클래스"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ============================================
# Configuration Errors
# ============================================
class ConfigError(BaseError):
    """설정 관련 오류"""
    pass


class ConfigNotFoundError(ConfigError):
    """설정 파일을 찾을 수 없음"""
    pass


class ConfigValidationError(ConfigError):
    """설정 값 유효성 검증 실패"""
    pass


# ============================================
# View Engine Errors
# ============================================
class ViewError(BaseError):
    """뷰 엔진 관련 오류"""
    pass


class ViewNotFoundError(ViewError):
    """뷰 정의를 찾을 수 없음"""

    def __init__(self, view_id: str):
        super().__init__(f"뷰를 찾을 수 없습니다: {view_id}", {"view_id": view_id})
        self.view_id = view_id


class DisplayNotFoundError(ViewError):
    """디스플레이 전환 실패"""

    def __init__(self, view_id: str, display_id: str):
        super().__init__(
            f"뷰 {view_id}에 디스플레이 {display_id}가 없습니다",
            {"view_id": view_id, "display_id": display_id},
        )
        self.view_id = view_id
        self.display_id = display_id


class ViewDefinitionError(ViewError):
    """뷰 정의 파일 형식 오류"""
    pass


# ============================================
# Stratification Errors
# ============================================
class StratifyError(BaseError):
    """계층화 관련 오류"""
    pass


class ConfigurationConflictError(StratifyError, ValueError):
    """디스플레이 이름에 exclusive/remainder 마커가 동시에 존재"""

    def __init__(self, display_id: str):
        super().__init__(
            f"Display {display_id} has conflicting stratification markers "
            f"(both exclusive_rows and remainder_rows)",
            {"display_id": display_id},
        )
        self.display_id = display_id


class SelectionUnavailableError(StratifyError):
    """선택 뷰/디스플레이를 불러올 수 없음"""
    pass


class SelectionExecutionError(StratifyError):
    """선택 쿼리 실행 또는 결과 추출 실패"""
    pass


# ============================================
# Database Errors
# ============================================
class DatabaseError(BaseError):
    """데이터베이스 관련 오류"""
    pass


class QueryError(DatabaseError):
    """쿼리 구성/실행 실패"""
    pass

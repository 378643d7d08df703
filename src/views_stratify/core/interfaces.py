"""
핵심 인터페이스 정의

뷰 엔진과 계층화 엔진이 공유하는 표준 인터페이스
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ============================================
# Enums
# ============================================
class DisplayRole(Enum):
    """디스플레이 이름으로부터 파생되는 계층화 역할"""
    UNCLASSIFIED = "unclassified"  # 계층화 대상 아님
    EXCLUSIVE = "exclusive"        # 선택 쿼리 결과만 표시
    REMAINDER = "remainder"        # 선택 쿼리 결과를 제외하고 표시
    CONFLICT = "conflict"          # 두 마커 동시 존재 (설정 오류)


# ============================================
# Data Classes
# ============================================
@dataclass(frozen=True)
class ArgumentHandler:
    """컨텍스트 필터(argument) 핸들러 - 위치 인자 하나를 컬럼에 바인딩"""
    field: str
    table: str = ""

    @property
    def real_field(self) -> str:
        """table.column 형태의 컬럼 참조"""
        return f"{self.table}.{self.field}" if self.table else self.field


@dataclass
class WhereCondition:
    """WHERE 절 조각"""
    group: int
    field: str
    value: Any
    operator: str


@dataclass
class InheritedFilters:
    """
    부모 디스플레이에서 상속된 컨텍스트 필터

    선택 디스플레이 자체에 argument 핸들러가 없을 때 뷰 인스턴스에 붙어
    중첩 실행의 query_alter 단계에서 소비된다.
    """
    handlers: list[ArgumentHandler] = field(default_factory=list)
    args: list[Any] = field(default_factory=list)


# ============================================
# Abstract Interfaces
# ============================================
class QueryPlugin(ABC):
    """뷰 쿼리 백엔드 인터페이스"""

    @property
    @abstractmethod
    def base_table(self) -> str:
        """쿼리 대상 base table"""
        pass

    @property
    @abstractmethod
    def primary_key(self) -> str:
        """base table의 기본키 컬럼명"""
        pass

    @abstractmethod
    def execute(self) -> list[dict[str, Any]]:
        """쿼리 실행 후 행 목록 반환"""
        pass


class ConditionalQuery(ABC):
    """
    raw 조건 주입을 지원하는 쿼리 (SQL 계열 백엔드)

    이 인터페이스를 구현하지 않는 백엔드에는 계층화 조건이 적용되지 않는다.
    """

    @abstractmethod
    def add_where(
        self,
        group: int,
        field: str,
        value: Any = None,
        operator: str | None = None,
    ) -> None:
        """WHERE 조건 추가"""
        pass

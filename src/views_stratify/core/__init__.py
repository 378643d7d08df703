"""
Core 모듈 - 공통 인프라

- config: 설정 관리
- logger: 로깅 서비스
- database: DB 관리
- cache: 요청 스코프 캐시
- context: 요청 컨텍스트
- exceptions: 커스텀 예외
- interfaces: 핵심 인터페이스
- models: ORM 모델
"""
from views_stratify.core.config import Config, get_config
from views_stratify.core.logger import get_logger, LoggerService, setup_logger_from_config
from views_stratify.core.database import (
    DatabaseManager,
    get_database,
    init_database_from_config,
    Base,
)
from views_stratify.core.cache import CacheBackend, MemoryCache
from views_stratify.core.context import RequestContext
from views_stratify.core.exceptions import (
    BaseError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    ViewError,
    ViewNotFoundError,
    DisplayNotFoundError,
    ViewDefinitionError,
    StratifyError,
    ConfigurationConflictError,
    SelectionUnavailableError,
    SelectionExecutionError,
    DatabaseError,
    QueryError,
)
from views_stratify.core.interfaces import (
    DisplayRole,
    ArgumentHandler,
    WhereCondition,
    InheritedFilters,
    QueryPlugin,
    ConditionalQuery,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    # Logger
    "get_logger",
    "LoggerService",
    "setup_logger_from_config",
    # Database
    "DatabaseManager",
    "get_database",
    "init_database_from_config",
    "Base",
    # Cache / Context
    "CacheBackend",
    "MemoryCache",
    "RequestContext",
    # Exceptions
    "BaseError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "ViewError",
    "ViewNotFoundError",
    "DisplayNotFoundError",
    "ViewDefinitionError",
    "StratifyError",
    "ConfigurationConflictError",
    "SelectionUnavailableError",
    "SelectionExecutionError",
    "DatabaseError",
    "QueryError",
    # Interfaces
    "DisplayRole",
    "ArgumentHandler",
    "WhereCondition",
    "InheritedFilters",
    "QueryPlugin",
    "ConditionalQuery",
]

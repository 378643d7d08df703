"""
Views: 뷰 엔진

YAML 뷰 정의 로드, 디스플레이 전환, SQL 쿼리 조립/실행, 훅 호출
"""
from views_stratify.views.definition import DEFAULT_DISPLAY, DisplayConfig, ViewDefinition
from views_stratify.views.registry import ViewStorage
from views_stratify.views.query import SqlQuery, OPERATORS
from views_stratify.views.executable import (
    EntityHandle,
    RenderedView,
    ResultRow,
    ViewExecutable,
)
from views_stratify.views.engine import HOOKS, ViewsEngine, init_views_engine_from_config

__all__ = [
    "DEFAULT_DISPLAY",
    "DisplayConfig",
    "ViewDefinition",
    "ViewStorage",
    "SqlQuery",
    "OPERATORS",
    "EntityHandle",
    "RenderedView",
    "ResultRow",
    "ViewExecutable",
    "HOOKS",
    "ViewsEngine",
    "init_views_engine_from_config",
]

"""
계층화 서비스

선택 디스플레이(embed_stratify_query)의 결과를 기준으로
exclusive 디스플레이는 그 결과만, remainder 디스플레이는 그 외 결과만 보이도록
뷰 쿼리에 IN / NOT IN 조건을 추가한다.
"""
from typing import Any

from views_stratify.core.exceptions import (
    ConfigurationConflictError,
    DisplayNotFoundError,
    SelectionExecutionError,
    SelectionUnavailableError,
    ViewNotFoundError,
)
from views_stratify.core.interfaces import DisplayRole, InheritedFilters
from views_stratify.core.logger import get_logger
from views_stratify.stratify.classifier import (
    SELECTION_DISPLAY,
    SELECTION_PLUGIN,
    classify_display,
    validate_display,
)
from views_stratify.stratify.keys import build_cache_key
from views_stratify.stratify.predicates import (
    apply_exclusive_filter,
    apply_inherited_filters,
    apply_remainder_filter,
    base_field,
)
from views_stratify.views.engine import ViewsEngine
from views_stratify.views.executable import ViewExecutable

LOG_CHANNEL = "views_stratify"

# RequestContext 캐시 이름 공간
ENABLED_CACHE = "stratify.enabled"
IDS_CACHE = "stratify.ids"

NODE_BASE_TABLE = "node_field_data"


class StratifyService:
    """
    뷰 계층화 서비스

    요청 단위 캐시 두 개(계층화 활성 여부, 선택 ID 목록)는 뷰에 연결된
    RequestContext가 소유한다. 같은 요청 안에서 같은 (뷰, 인자) 조합의
    선택 쿼리는 한 번만 실행된다.

    사용법:
        service = StratifyService(engine)
        engine.add_hook("query_alter", service.alter_query)
        engine.add_hook("pre_render", service.add_cache_tags)
    """

    def __init__(self, views: ViewsEngine, log_channel: str = LOG_CHANNEL):
        self.views = views
        self.logger = get_logger(log_channel)

    # ============================================
    # 진입점
    # ============================================
    def alter_query(self, view: ViewExecutable, query: Any) -> None:
        """
        query_alter 훅 - 계층화 조건 적용

        어떤 오류도 호출자(렌더링)로 전파하지 않는다.
        """
        try:
            self._alter_query(view, query)
        except Exception as e:
            self.logger.error(f"계층화 쿼리 변경 실패 ({view.id}:{view.current_display}): {e}")

    def _alter_query(self, view: ViewExecutable, query: Any) -> None:
        # 1. 계층화 대상 뷰인지
        if not self.should_apply_stratification(view):
            return

        # 중첩 실행된 선택 디스플레이에 상속 필터가 붙어 있으면 먼저 소비
        if view.inherited_filters is not None:
            apply_inherited_filters(query, view.base_table, view.inherited_filters)

        display_id = view.current_display

        # 2. 마커 충돌 검증
        try:
            validate_display(display_id)
        except ConfigurationConflictError as e:
            self.logger.error(f"Invalid display configuration: {e.message}")
            return

        # 3. 역할 판정
        role = classify_display(display_id)
        if role is DisplayRole.UNCLASSIFIED:
            return

        # 4. 선택 ID 조회 → 5. 조건 적용
        entity_ids = self.get_stratified_ids(view)

        if role is DisplayRole.EXCLUSIVE:
            apply_exclusive_filter(query, view.base_table, entity_ids)
        else:
            apply_remainder_filter(query, view.base_table, entity_ids)

    def add_cache_tags(self, view: ViewExecutable) -> None:
        """
        pre_render 훅 - 계층화된 디스플레이에 캐시 태그 추가

        어떤 오류도 호출자(렌더링)로 전파하지 않는다.
        """
        try:
            self._add_cache_tags(view)
        except Exception as e:
            self.logger.error(f"계층화 캐시 태그 추가 실패 ({view.id}:{view.current_display}): {e}")

    def _add_cache_tags(self, view: ViewExecutable) -> None:
        if not self.should_apply_stratification(view):
            return

        role = classify_display(view.current_display or "")
        if role not in (DisplayRole.EXCLUSIVE, DisplayRole.REMAINDER):
            return

        tags = [f"config:views.view.{view.id}"]
        if view.base_table == NODE_BASE_TABLE:
            tags.append("node_list")

        for tag in tags:
            if tag not in view.cache_tags:
                view.cache_tags.append(tag)

    # ============================================
    # 활성 여부 (요청 단위 캐시)
    # ============================================
    def should_apply_stratification(self, view: ViewExecutable) -> bool:
        """
        뷰에 embed 타입의 embed_stratify_query 디스플레이가 있는지

        결과는 요청 컨텍스트가 reset될 때까지 다시 검사하지 않는다.
        """
        cache = view.request.cache(ENABLED_CACHE)
        if cache.exists(view.id):
            return cache.get(view.id)

        display = view.storage.displays.get(SELECTION_DISPLAY)
        enabled = display is not None

        if display is not None and display.display_plugin != SELECTION_PLUGIN:
            self.logger.warning(
                f"Display {SELECTION_DISPLAY} in view {view.id} must be of type Embed. "
                f"Found: {display.display_plugin or 'unknown'}"
            )
            enabled = False

        cache.set(view.id, enabled)
        return enabled

    # ============================================
    # 컨텍스트 인자
    # ============================================
    def get_contextual_arguments(self, view: ViewExecutable) -> list[Any]:
        """
        선택 쿼리에 넘길 컨텍스트 인자

        1. 뷰에 바인딩된 인자
        2. 다른 뷰에 임베드된 경우 요청의 라우트 변수 값 (삽입 순서)
        3. 빈 목록
        """
        if view.args:
            return list(view.args)

        request = view.request
        if view.parent_views and request is not None and request.raw_variables:
            return list(request.raw_variables.values())

        return []

    # ============================================
    # 선택 쿼리 실행 (요청 단위 캐시)
    # ============================================
    def get_stratified_ids(self, view: ViewExecutable) -> list[Any]:
        """
        선택 디스플레이 결과의 엔티티 ID 목록

        실패 시 예외 대신 빈 목록을 돌려준다 (실패 결과는 캐시하지 않음).
        같은 요청을 여러 스레드가 공유해도 (뷰, 인자) 조합당 선택 쿼리는 한 번만 실행된다.
        """
        # 인자를 먼저 결정해야 캐시 키가 실제 사용한 인자를 반영함
        args = self.get_contextual_arguments(view)
        cache_key = build_cache_key(view.id, args)
        cache = view.request.cache(IDS_CACHE)

        def select_ids() -> list[Any]:
            stratify_view = self._load_selection_view(view)
            return self._execute_selection(view, stratify_view, args)

        try:
            entity_ids = cache.get_or_set(cache_key, select_ids)
        except SelectionUnavailableError as e:
            self.logger.warning(e.message)
            return []
        except SelectionExecutionError as e:
            self.logger.error(f"Error executing stratify query: {e.message}")
            return []

        return list(entity_ids)

    def _load_selection_view(self, view: ViewExecutable) -> ViewExecutable:
        """같은 뷰를 새로 로드해 선택 디스플레이로 전환"""
        try:
            stratify_view = self.views.get_view(view.id, view.request)
        except ViewNotFoundError as e:
            raise SelectionUnavailableError(
                f"Could not load view {view.id} for stratification"
            ) from e
        except Exception as e:
            raise SelectionExecutionError(str(e), {"view_id": view.id}) from e

        try:
            stratify_view.set_display(SELECTION_DISPLAY)
        except DisplayNotFoundError as e:
            raise SelectionUnavailableError(
                f"Could not set {SELECTION_DISPLAY} display for view {view.id}"
            ) from e

        return stratify_view

    def _execute_selection(
        self,
        view: ViewExecutable,
        stratify_view: ViewExecutable,
        args: list[Any],
    ) -> list[Any]:
        """선택 뷰 실행 후 ID 추출 (ID 컬럼 → 엔티티 순, 둘 다 없으면 건너뜀)"""
        try:
            if args:
                self.inherit_contextual_filters(view, stratify_view, args)

            stratify_view.execute()

            id_field = base_field(stratify_view.base_table)
            entity_ids = []
            for row in stratify_view.result:
                value = row.get(id_field)
                if value is not None:
                    entity_ids.append(value)
                elif row.entity is not None and row.entity.id():
                    entity_ids.append(row.entity.id())
            return entity_ids

        except Exception as e:
            raise SelectionExecutionError(str(e), {"view_id": view.id}) from e

    # ============================================
    # 컨텍스트 필터 상속
    # ============================================
    def inherit_contextual_filters(
        self,
        source_view: ViewExecutable,
        target_view: ViewExecutable,
        args: list[Any],
    ) -> None:
        """
        현재 디스플레이의 컨텍스트 필터를 선택 뷰로 상속

        선택 디스플레이에 argument 핸들러가 없으면 InheritedFilters를 붙여
        선택 뷰 자신의 query_alter 단계에서 조건으로 적용되게 한다.
        """
        source_handlers = source_view.get_handlers("argument")
        if not source_handlers:
            return

        target_handlers = target_view.get_handlers("argument")

        target_view.set_arguments(args)

        if not target_handlers:
            target_view.inherited_filters = InheritedFilters(
                handlers=list(source_handlers),
                args=list(args),
            )

"""
뷰 실행 객체

하나의 뷰 정의를 특정 디스플레이/인자로 빌드-실행-렌더링
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from views_stratify.core.context import RequestContext
from views_stratify.core.exceptions import DisplayNotFoundError
from views_stratify.core.interfaces import (
    ArgumentHandler,
    ConditionalQuery,
    InheritedFilters,
    QueryPlugin,
)
from views_stratify.views.definition import DEFAULT_DISPLAY, ViewDefinition

if TYPE_CHECKING:
    from views_stratify.views.engine import ViewsEngine


@dataclass
class EntityHandle:
    """결과 행에 붙는 엔티티 참조"""
    entity_type: str
    entity_id: Any

    def id(self) -> Any:
        return self.entity_id


@dataclass
class ResultRow:
    """뷰 결과 행"""
    fields: dict[str, Any] = field(default_factory=dict)
    entity: EntityHandle | None = None

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        base_table: str,
        primary_key: str,
        fields: list[str] | None = None,
    ) -> "ResultRow":
        projected = {name: record.get(name) for name in fields} if fields else dict(record)
        return cls(
            fields=projected,
            entity=EntityHandle(entity_type=base_table, entity_id=record.get(primary_key)),
        )


@dataclass
class RenderedView:
    """렌더링 결과"""
    view_id: str
    display_id: str
    rows: list[ResultRow] = field(default_factory=list)
    cache_tags: list[str] = field(default_factory=list)

    @property
    def entity_ids(self) -> list[Any]:
        return [row.entity.id() for row in self.rows if row.entity is not None]


class ViewExecutable:
    """
    뷰 실행 객체

    사용법:
        view = engine.get_view("articles", request)
        view.set_display("featured_exclusive_rows")
        view.set_arguments([7])
        rendered = view.render()
    """

    def __init__(self, storage: ViewDefinition, engine: "ViewsEngine", request: RequestContext):
        self.storage = storage
        self.engine = engine
        self.request = request

        self.current_display: str | None = None
        self.args: list[Any] = []
        self.parent_views: list[str] = []
        self.inherited_filters: InheritedFilters | None = None
        self.cache_tags: list[str] = []

        self.query: QueryPlugin | None = None
        self.result: list[ResultRow] = []
        self.built = False
        self.executed = False

    @property
    def id(self) -> str:
        return self.storage.view_id

    @property
    def base_table(self) -> str:
        return self.storage.base_table

    def set_display(self, display_id: str | None = None) -> None:
        """
        디스플레이 전환

        Raises:
            DisplayNotFoundError: 정의에 없는 디스플레이
        """
        display_id = display_id or DEFAULT_DISPLAY
        if not self.storage.has_display(display_id):
            raise DisplayNotFoundError(self.id, display_id)

        self.current_display = display_id
        self.query = None
        self.result = []
        self.built = False
        self.executed = False

    def set_arguments(self, args: list[Any]) -> None:
        self.args = list(args)

    def attach_to(self, parent: "ViewExecutable", inherit_arguments: bool = False) -> None:
        """다른 뷰 안에 임베드된 뷰로 표시"""
        self.parent_views = [*parent.parent_views, parent.id]
        if inherit_arguments:
            self.set_arguments(parent.args)

    def get_handlers(self, handler_type: str) -> list[ArgumentHandler]:
        """현재 디스플레이의 핸들러 목록 (argument만 지원)"""
        if handler_type != "argument":
            return []
        fields = self.storage.get_option(self.current_display or DEFAULT_DISPLAY, "arguments") or []
        return [ArgumentHandler(field=name, table=self.base_table) for name in fields]

    def _option(self, name: str) -> Any:
        return self.storage.get_option(self.current_display or DEFAULT_DISPLAY, name)

    def build(self) -> None:
        """쿼리 조립: 필터 → 컨텍스트 인자 → query_alter 훅"""
        if self.built:
            return
        if self.current_display is None:
            self.set_display()

        query = self.engine.create_query(self.base_table, sort=self._option("sort"))

        if isinstance(query, ConditionalQuery):
            # 1. 고정 필터
            for name, value in (self._option("filters") or {}).items():
                operator = "IN" if isinstance(value, list) else "="
                query.add_where(0, f"{self.base_table}.{name}", value, operator)

            # 2. 컨텍스트 필터 (인자가 없는 핸들러는 건너뜀)
            for handler, arg in zip(self.get_handlers("argument"), self.args):
                query.add_where(0, handler.real_field, arg, "=")

        self.query = query
        self.engine.invoke_hooks("query_alter", self, query)
        self.built = True

    def execute(self) -> list[ResultRow]:
        """쿼리 실행 후 self.result 채움"""
        if self.executed:
            return self.result

        self.build()
        records = self.query.execute()
        fields = self._option("fields")
        self.result = [
            ResultRow.from_record(record, self.base_table, self.query.primary_key, fields)
            for record in records
        ]
        self.executed = True
        return self.result

    def render(self) -> RenderedView:
        """실행 + pre_render 훅"""
        self.execute()
        self.engine.invoke_hooks("pre_render", self)
        return RenderedView(
            view_id=self.id,
            display_id=self.current_display,
            rows=list(self.result),
            cache_tags=list(self.cache_tags),
        )

    def __repr__(self) -> str:
        return f"<ViewExecutable {self.id}:{self.current_display} args={self.args}>"

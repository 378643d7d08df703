"""
뷰 엔진

뷰 저장소 + DB + 훅 레지스트리를 묶는 진입점
"""
from typing import Any, Callable

from views_stratify.core.context import RequestContext
from views_stratify.core.database import DatabaseManager
from views_stratify.core.logger import get_logger
from views_stratify.views.executable import ViewExecutable
from views_stratify.views.query import SqlQuery
from views_stratify.views.registry import ViewStorage

# 지원 훅
#   query_alter(view, query): 쿼리 조립 직후, 실행 전
#   pre_render(view): 실행 후, 렌더 결과 생성 전
HOOKS = ("query_alter", "pre_render")


class ViewsEngine:
    """
    뷰 엔진

    사용법:
        engine = ViewsEngine(ViewStorage(Path("config/views")), db)
        engine.add_hook("query_alter", my_alter)

        view = engine.get_view("articles", RequestContext())
        view.set_display("page_1")
        rendered = view.render()
    """

    def __init__(self, storage: ViewStorage, db: DatabaseManager):
        self.logger = get_logger(self.__class__.__name__)
        self.storage = storage
        self.db = db
        self._hooks: dict[str, list[Callable[..., Any]]] = {name: [] for name in HOOKS}

    def add_hook(self, name: str, callback: Callable[..., Any]) -> None:
        if name not in self._hooks:
            raise ValueError(f"지원하지 않는 훅: {name}")
        self._hooks[name].append(callback)

    def invoke_hooks(self, name: str, view: ViewExecutable, *args: Any) -> None:
        for callback in self._hooks.get(name, []):
            callback(view, *args)

    def create_query(self, base_table: str, sort: list[str] | None = None) -> SqlQuery:
        return SqlQuery(base_table, self.db, sort=sort)

    def get_view(self, view_id: str, request: RequestContext) -> ViewExecutable:
        """
        뷰 실행 객체 생성 (매번 새 인스턴스)

        Raises:
            ViewNotFoundError: 등록되지 않은 뷰
        """
        definition = self.storage.load(view_id)
        return ViewExecutable(definition, self, request)


def init_views_engine_from_config() -> ViewsEngine:
    """설정 파일 기반 뷰 엔진 초기화"""
    from views_stratify.core.config import get_config
    from views_stratify.core.database import init_database_from_config

    config = get_config()
    storage = ViewStorage(config.resolve_path("views.definitions_dir", "config/views"))
    return ViewsEngine(storage, init_database_from_config())

"""
뷰 저장소

YAML 파일에서 뷰 정의를 읽어 보관하고, 요청마다 독립 사본을 돌려준다.
"""
from pathlib import Path

import yaml

from views_stratify.core.exceptions import ViewDefinitionError, ViewNotFoundError
from views_stratify.core.logger import get_logger
from views_stratify.views.definition import ViewDefinition


class ViewStorage:
    """
    뷰 정의 저장소

    사용법:
        storage = ViewStorage(Path("config/views"))
        definition = storage.load("articles")   # 깊은 복사본
    """

    def __init__(self, definitions_dir: Path | None = None):
        self.logger = get_logger(self.__class__.__name__)
        self.definitions_dir = definitions_dir
        self._views: dict[str, ViewDefinition] = {}
        self._loaded = definitions_dir is None

    def _load_all(self) -> None:
        """definitions_dir의 *.yaml 전부 로드 (최초 1회)"""
        if self._loaded:
            return
        self._loaded = True

        if not self.definitions_dir.exists():
            self.logger.warning(f"뷰 정의 디렉토리가 없습니다: {self.definitions_dir}")
            return

        for path in sorted(self.definitions_dir.glob("*.yaml")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
                definition = ViewDefinition.from_dict(data)
            except (yaml.YAMLError, ViewDefinitionError) as e:
                self.logger.error(f"뷰 정의 로드 실패 {path}: {e}")
                continue
            self._views[definition.view_id] = definition
            self.logger.debug(f"뷰 로드: {definition.view_id}")

        self.logger.info(f"뷰 정의 {len(self._views)}개 로드 완료")

    def register(self, definition: ViewDefinition | dict) -> ViewDefinition:
        """뷰 정의 등록 (같은 id는 교체)"""
        if isinstance(definition, dict):
            definition = ViewDefinition.from_dict(definition)
        self._load_all()
        self._views[definition.view_id] = definition
        return definition

    def load(self, view_id: str) -> ViewDefinition:
        """
        뷰 정의 로드

        Returns:
            저장소와 분리된 ViewDefinition 사본

        Raises:
            ViewNotFoundError: 등록되지 않은 뷰
        """
        self._load_all()
        definition = self._views.get(view_id)
        if definition is None:
            raise ViewNotFoundError(view_id)
        return definition.copy()

    def exists(self, view_id: str) -> bool:
        self._load_all()
        return view_id in self._views

    def list_ids(self) -> list[str]:
        self._load_all()
        return sorted(self._views)

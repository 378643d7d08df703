"""
요청 컨텍스트

하나의 작업 단위(요청/렌더 사이클)에 묶인 상태를 보관
"""
import threading
from typing import Any, Mapping

from views_stratify.core.cache import MemoryCache


class RequestContext:
    """
    요청 단위 컨텍스트

    - raw_variables: 현재 요청의 라우트 경로 변수 (삽입 순서 유지)
    - cache(namespace): 이름별 요청 스코프 캐시

    동시에 처리되는 요청끼리 캐시를 공유하지 않도록 요청마다 새로 만들거나,
    장기 실행 워커에서 재사용한다면 작업 단위 시작 시 reset()을 호출한다.

    사용법:
        request = RequestContext(raw_variables={"uid": "7"})
        view = engine.get_view("articles", request)
        ...
        request.reset()  # 다음 요청 시작 전
    """

    def __init__(self, raw_variables: Mapping[str, Any] | None = None):
        self.raw_variables: dict[str, Any] = dict(raw_variables or {})
        self._caches: dict[str, MemoryCache] = {}
        self._lock = threading.Lock()

    def cache(self, namespace: str) -> MemoryCache:
        """이름 공간별 캐시 반환 (없으면 생성)"""
        with self._lock:
            if namespace not in self._caches:
                self._caches[namespace] = MemoryCache()
            return self._caches[namespace]

    def reset(self) -> None:
        """새 요청 시작 - 보유한 모든 캐시 비우기"""
        with self._lock:
            for cache in self._caches.values():
                cache.clear()

    def reset_for_new_request(self, raw_variables: Mapping[str, Any] | None = None) -> None:
        """캐시 초기화 + 라우트 변수 교체"""
        self.reset()
        self.raw_variables = dict(raw_variables or {})

    def __repr__(self) -> str:
        return f"<RequestContext raw_variables={self.raw_variables!r} caches={sorted(self._caches)}>"

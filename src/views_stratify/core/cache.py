"""
캐시 서비스

요청 단위 메모리 캐시 (RequestContext가 소유)
"""
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable

_MISSING = object()


class CacheBackend(ABC):
    """캐시 백엔드 인터페이스"""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """캐시 조회"""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """캐시 저장"""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """캐시 삭제"""
        pass

    @abstractmethod
    def clear(self) -> None:
        """전체 캐시 삭제"""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """키 존재 여부"""
        pass


class MemoryCache(CacheBackend):
    """
    인메모리 캐시 (만료 없음, 스레드 안전)

    False / [] 같은 값도 정상 캐시 값으로 취급한다.
    존재 여부는 exists()로 확인.

    사용법:
        cache = MemoryCache()
        cache.set("stratify:articles:abc", [1, 3])
        ids = cache.get("stratify:articles:abc", [])
    """

    def __init__(self):
        self._cache: dict[str, Any] = {}
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        """캐시 조회"""
        with self._lock:
            return self._cache.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """캐시 저장"""
        with self._lock:
            self._cache[key] = value

    def delete(self, key: str) -> bool:
        """캐시 삭제"""
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> None:
        """전체 캐시 삭제"""
        with self._lock:
            self._cache.clear()

    def exists(self, key: str) -> bool:
        """키 존재 여부"""
        with self._lock:
            return key in self._cache

    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        """
        캐시 조회, 없으면 factory 호출하여 저장

        조회-생성-저장 전체를 한 락 안에서 수행하므로 같은 키의 factory는
        동시에 여러 번 호출되지 않는다. factory가 예외를 내면 저장하지 않는다.

        Args:
            key: 캐시 키
            factory: 값 생성 함수

        Returns:
            캐시된 값 또는 새로 생성된 값
        """
        with self._lock:
            value = self._cache.get(key, _MISSING)
            if value is _MISSING:
                value = factory()
                self._cache[key] = value
            return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

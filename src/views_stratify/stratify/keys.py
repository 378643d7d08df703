"""
캐시 키 생성
"""
import hashlib
import json
from typing import Any, Sequence

CACHE_KEY_PREFIX = "stratify"


def serialize_arguments(args: Sequence[Any]) -> str:
    """인자 목록의 정규 직렬화 (순서 보존, dict 키는 정렬)"""
    return json.dumps(list(args), sort_keys=True, separators=(",", ":"), default=str)


def build_cache_key(view_id: str, args: Sequence[Any] = ()) -> str:
    """
    선택 결과 캐시 키

    형식: stratify:<view_id>:<md5 hex 32자>

    Examples:
        >>> build_cache_key("articles", [1, "foo"]).startswith("stratify:articles:")
        True
    """
    digest = hashlib.md5(serialize_arguments(args).encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}:{view_id}:{digest}"

"""
Stratify: 뷰 결과 계층화

선택 디스플레이 결과를 기준으로 exclusive / remainder 디스플레이를 분할
"""
from views_stratify.stratify.classifier import (
    EXCLUSIVE_MARKER,
    REMAINDER_MARKER,
    SELECTION_DISPLAY,
    SELECTION_PLUGIN,
    classify_display,
    is_exclusive_display,
    is_remainder_display,
    validate_display,
)
from views_stratify.stratify.keys import build_cache_key
from views_stratify.stratify.predicates import (
    apply_exclusive_filter,
    apply_inherited_filters,
    apply_remainder_filter,
    base_field,
)
from views_stratify.stratify.service import StratifyService
from views_stratify.stratify.hooks import init_stratify_from_config, register_stratify_hooks

__all__ = [
    "EXCLUSIVE_MARKER",
    "REMAINDER_MARKER",
    "SELECTION_DISPLAY",
    "SELECTION_PLUGIN",
    "classify_display",
    "is_exclusive_display",
    "is_remainder_display",
    "validate_display",
    "build_cache_key",
    "apply_exclusive_filter",
    "apply_inherited_filters",
    "apply_remainder_filter",
    "base_field",
    "StratifyService",
    "init_stratify_from_config",
    "register_stratify_hooks",
]

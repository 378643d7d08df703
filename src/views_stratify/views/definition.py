"""
뷰 정의

YAML로 기술되는 뷰(쿼리 + 디스플레이 묶음) 데이터 구조
"""
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from views_stratify.core.exceptions import ViewDefinitionError

DEFAULT_DISPLAY = "default"


@dataclass
class DisplayConfig:
    """
    디스플레이 설정

    filters / arguments / fields 가 None이면 default 디스플레이 값을 상속한다.
    """
    display_id: str
    display_plugin: str = "block"
    display_title: str = ""
    filters: dict[str, Any] | None = None
    arguments: list[str] | None = None
    fields: list[str] | None = None
    sort: list[str] | None = None

    @classmethod
    def from_dict(cls, display_id: str, data: dict[str, Any] | None) -> "DisplayConfig":
        data = data or {}
        arguments = data.get("arguments")
        if arguments is not None and not isinstance(arguments, list):
            raise ViewDefinitionError(
                f"디스플레이 {display_id}의 arguments는 리스트여야 합니다",
                {"arguments": arguments},
            )
        filters = data.get("filters")
        if filters is not None and not isinstance(filters, dict):
            raise ViewDefinitionError(
                f"디스플레이 {display_id}의 filters는 딕셔너리여야 합니다",
                {"filters": filters},
            )
        return cls(
            display_id=display_id,
            display_plugin=data.get("display_plugin", "block"),
            display_title=data.get("display_title", ""),
            filters=filters,
            arguments=arguments,
            fields=data.get("fields"),
            sort=data.get("sort"),
        )


@dataclass
class ViewDefinition:
    """
    뷰 정의 (설정 엔티티)

    사용법:
        definition = ViewDefinition.from_dict(yaml.safe_load(f))
        definition.base_table           # "node_field_data"
        definition.displays.keys()      # {"default", "embed_stratify_query", ...}
    """
    view_id: str
    base_table: str
    label: str = ""
    displays: dict[str, DisplayConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ViewDefinition":
        if not isinstance(data, dict):
            raise ViewDefinitionError("뷰 정의는 딕셔너리여야 합니다")
        for key in ("id", "base_table"):
            if not data.get(key):
                raise ViewDefinitionError(f"뷰 정의에 '{key}' 필드가 없습니다", {"data": data})

        displays_data = data.get("display") or {}
        if not isinstance(displays_data, dict):
            raise ViewDefinitionError(
                f"뷰 {data['id']}의 display는 딕셔너리여야 합니다"
            )

        displays = {
            display_id: DisplayConfig.from_dict(display_id, options)
            for display_id, options in displays_data.items()
        }
        if DEFAULT_DISPLAY not in displays:
            displays[DEFAULT_DISPLAY] = DisplayConfig(
                display_id=DEFAULT_DISPLAY, display_plugin=DEFAULT_DISPLAY
            )

        return cls(
            view_id=data["id"],
            base_table=data["base_table"],
            label=data.get("label", data["id"]),
            displays=displays,
        )

    def copy(self) -> "ViewDefinition":
        """독립 인스턴스 (깊은 복사)"""
        return deepcopy(self)

    def has_display(self, display_id: str) -> bool:
        return display_id in self.displays

    def get_option(self, display_id: str, option: str) -> Any:
        """디스플레이 옵션 조회 (None이면 default 디스플레이로 폴백)"""
        display = self.displays.get(display_id)
        value = getattr(display, option, None) if display else None
        if value is None and display_id != DEFAULT_DISPLAY:
            value = getattr(self.displays.get(DEFAULT_DISPLAY), option, None)
        return value

"""
설정 관리 모듈

설정 우선순위 (뒤가 앞을 덮어씀):
    1. config/settings.yaml
    2. config/settings.<APP_ENV>.yaml
    3. STRATIFY_<SECTION>_<KEY> 환경 변수 (.env 포함)
"""
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from views_stratify.core.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

ENV_PREFIX = "STRATIFY_"

# 값 타입을 강제하는 키
TYPED_KEYS: dict[str, type] = {
    "database.url": str,
    "views.definitions_dir": str,
    "stratify.log_channel": str,
}


def deep_merge(base: dict, override: dict) -> dict:
    """딕셔너리 깊은 병합 (새 딕셔너리 반환)"""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _parse_env_value(raw: str) -> Any:
    """환경 변수 문자열을 YAML 스칼라로 해석 ("false" → False, "5" → 5)"""
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return value if isinstance(value, (str, int, float, bool)) else raw


class Config:
    """
    설정 관리자 (싱글톤)

    사용법:
        config = Config()                   # APP_ENV 또는 development
        config = Config(env="test")

        config.get("database.url")
        config.get("stratify.log_channel", default="views_stratify")
        config.resolve_path("views.definitions_dir")   # 프로젝트 루트 기준 Path
    """

    _instance: "Config | None" = None
    _initialized: bool = False

    def __new__(cls, *args, **kwargs) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, env: str | None = None, config_dir: Path | None = None):
        if Config._initialized:
            return

        load_dotenv()

        self.env = env or os.getenv("APP_ENV", "development")
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).resolve().parents[3] / "config"

        self._config: dict[str, Any] = {}
        for layer in self._layers():
            self._config = deep_merge(self._config, layer)
        self._validate()

        Config._initialized = True

    def _layers(self) -> list[dict[str, Any]]:
        base_path = self.config_dir / "settings.yaml"
        if not base_path.exists():
            raise ConfigNotFoundError(f"기본 설정 파일을 찾을 수 없습니다: {base_path}")

        layers = [self._load_yaml(base_path)]

        env_path = self.config_dir / f"settings.{self.env}.yaml"
        if env_path.exists():
            layers.append(self._load_yaml(env_path))

        layers.append(self._env_layer())
        return layers

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML 파싱 오류: {path}", {"error": str(e)}) from e

        if not isinstance(data, dict):
            raise ConfigValidationError(f"설정 파일 최상위는 딕셔너리여야 합니다: {path}")
        return data

    @staticmethod
    def _env_layer() -> dict[str, Any]:
        """STRATIFY_DATABASE_URL -> {"database": {"url": ...}}"""
        layer: dict[str, Any] = {}
        for key, raw in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, name = key[len(ENV_PREFIX):].lower().partition("_")
            if not name:
                continue
            layer.setdefault(section, {})[name] = _parse_env_value(raw)
        return layer

    def _validate(self) -> None:
        for key, expected in TYPED_KEYS.items():
            value = self.get(key)
            if value is not None and not isinstance(value, expected):
                raise ConfigValidationError(
                    f"설정 값 타입 오류: {key}",
                    {"expected": expected.__name__, "actual": type(value).__name__},
                )

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정 값 조회 (점 표기법)

        Args:
            key: 설정 키 (예: "database.url")
            default: 키가 없을 때 반환값
        """
        current: Any = self._config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_required(self, key: str) -> Any:
        """
        필수 설정 값 조회

        Raises:
            ConfigValidationError: 설정 값이 없는 경우
        """
        value = self.get(key)
        if value is None:
            raise ConfigValidationError(f"필수 설정 값이 없습니다: {key}")
        return value

    def get_section(self, section: str) -> dict[str, Any]:
        return self.get(section) or {}

    def resolve_path(self, key: str, default: str | None = None) -> Path | None:
        """설정된 경로를 프로젝트 루트(config 디렉토리의 부모) 기준으로 변환"""
        value = self.get(key, default)
        if value is None:
            return None
        path = Path(value)
        return path if path.is_absolute() else self.config_dir.parent / path

    @classmethod
    def reset(cls) -> None:
        """싱글톤 인스턴스 리셋 (테스트용)"""
        cls._instance = None
        cls._initialized = False


def get_config() -> Config:
    """Config 인스턴스 반환 (편의 함수)"""
    return Config()

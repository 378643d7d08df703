"""
로깅 서비스

loguru 기반 채널 로깅. 채널명은 get_logger()가 extra["name"]에 바인딩한다.
"""
import sys
from pathlib import Path
from typing import Any, Iterable

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def _channel_filter(channel: str):
    def _filter(record: dict) -> bool:
        return record["extra"].get("name") == channel
    return _filter


class LoggerService:
    """
    로깅 서비스

    콘솔 + app.log + error.log 에 더해, channels로 지정한 채널은
    <채널명>.log 파일에 따로 남긴다.

    사용법:
        LoggerService.configure(level="DEBUG", channels=["views_stratify"])

        logger = get_logger("views_stratify")
        logger.warning("Could not load view articles for stratification")
    """

    _configured: bool = False
    _handler_ids: list[int] = []

    @classmethod
    def configure(
        cls,
        level: str = "INFO",
        log_dir: str = "./logs",
        log_format: str | None = None,
        file_enabled: bool = True,
        rotation: str = "10 MB",
        retention: str = "7 days",
        channels: Iterable[str] = (),
    ) -> None:
        """
        로거 설정 (최초 1회)

        Args:
            level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: 로그 파일 디렉토리
            log_format: 로그 포맷 (None이면 DEFAULT_FORMAT)
            file_enabled: 파일 로깅 활성화 여부
            rotation: 로그 파일 로테이션 크기
            retention: 로그 파일 보관 기간
            channels: 별도 파일로 분리할 채널 이름
        """
        if cls._configured:
            return

        # loguru 기본 stderr 핸들러 제거
        logger.remove()
        logger.configure(extra={"name": "root"})

        log_format = log_format or DEFAULT_FORMAT
        cls._handler_ids.append(
            logger.add(sys.stderr, format=log_format, level=level, colorize=True)
        )

        if file_enabled:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)

            def add_file(filename: str, file_level: str, **kwargs: Any) -> None:
                cls._handler_ids.append(logger.add(
                    log_path / filename,
                    format=log_format,
                    level=file_level,
                    rotation=rotation,
                    retention=retention,
                    compression="zip",
                    encoding="utf-8",
                    **kwargs,
                ))

            add_file("app.log", level)
            add_file("error.log", "ERROR")
            for channel in channels:
                add_file(f"{channel}.log", level, filter=_channel_filter(channel))

        cls._configured = True

    @classmethod
    def reset(cls) -> None:
        """설정 리셋 (테스트용, configure가 추가한 핸들러만 제거)"""
        for handler_id in cls._handler_ids:
            try:
                logger.remove(handler_id)
            except ValueError:
                pass
        cls._handler_ids = []
        cls._configured = False


def get_logger(name: str) -> Any:
    """
    채널 로거 반환

    Args:
        name: 채널 이름 (클래스명 또는 서비스 채널)

    Returns:
        extra["name"]이 바인딩된 loguru logger
    """
    return logger.bind(name=name)


def setup_logger_from_config() -> None:
    """설정 파일 기반 로거 초기화"""
    from views_stratify.core.config import get_config
    from views_stratify.core.exceptions import ConfigError

    try:
        config = get_config()
    except ConfigError:
        # 설정 파일이 없으면 기본 설정 사용
        LoggerService.configure()
        return

    logging_config = config.get_section("logging")
    file_config = logging_config.get("file") or {}

    LoggerService.configure(
        level=logging_config.get("level", "INFO"),
        log_dir=str(config.resolve_path("logging.log_dir", "./logs")),
        log_format=logging_config.get("format"),
        file_enabled=file_config.get("enabled", True),
        rotation=file_config.get("rotation", "10 MB"),
        retention=file_config.get("retention", "7 days"),
        channels=[config.get("stratify.log_channel", "views_stratify")],
    )

"""
뷰 엔진 훅 연결
"""
from views_stratify.stratify.service import LOG_CHANNEL, StratifyService
from views_stratify.views.engine import ViewsEngine


def register_stratify_hooks(engine: ViewsEngine, service: StratifyService | None = None) -> StratifyService:
    """
    계층화 서비스를 뷰 엔진 훅에 등록

    Returns:
        등록된 StratifyService
    """
    service = service or StratifyService(engine)
    engine.add_hook("query_alter", service.alter_query)
    engine.add_hook("pre_render", service.add_cache_tags)
    return service


def init_stratify_from_config(engine: ViewsEngine) -> StratifyService:
    """설정 파일 기반 서비스 생성 + 훅 등록"""
    from views_stratify.core.config import get_config

    config = get_config()
    channel = config.get("stratify.log_channel", LOG_CHANNEL)
    return register_stratify_hooks(engine, StratifyService(engine, log_channel=channel))

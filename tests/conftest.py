"""
공통 pytest fixture

- 인메모리 SQLite DB
- config/views YAML 기반 뷰 엔진
- loguru 로그 캡처
"""
from pathlib import Path

import pytest
from loguru import logger

from views_stratify.core.context import RequestContext
from views_stratify.core.database import DatabaseManager
from views_stratify.core.models import NodeModel, UserModel
from views_stratify.views.engine import ViewsEngine
from views_stratify.views.registry import ViewStorage

PROJECT_ROOT = Path(__file__).resolve().parents[1]
VIEWS_DIR = PROJECT_ROOT / "config" / "views"

# nid: (title, tag, uid)
NODES = {
    1: ("Launch recap", "Featured", 7),
    2: ("Weekly notes", "", 7),
    3: ("Roadmap", "Featured", 8),
    4: ("Changelog", "", 8),
    5: ("Team update", "", 7),
}


@pytest.fixture
def db():
    """빈 인메모리 DB"""
    DatabaseManager.reset()
    database = DatabaseManager(connection_string="sqlite://")
    database.create_all_tables()
    yield database
    DatabaseManager.reset()


@pytest.fixture
def seeded_db(db):
    """노드 5건 (1, 3번이 Featured) + 작성자 2명"""
    with db.session() as session:
        session.add_all([UserModel(uid=7, name="alice"), UserModel(uid=8, name="bob")])
        session.flush()
        session.add_all([
            NodeModel(nid=nid, title=title, tag=tag, uid=uid, status=True)
            for nid, (title, tag, uid) in NODES.items()
        ])
    return db


@pytest.fixture
def storage():
    return ViewStorage(VIEWS_DIR)


@pytest.fixture
def engine(storage, seeded_db):
    return ViewsEngine(storage, seeded_db)


@pytest.fixture
def request_context():
    return RequestContext()


@pytest.fixture
def log_records():
    """loguru 레코드 캡처"""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)

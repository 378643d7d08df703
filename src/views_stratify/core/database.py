"""
데이터베이스 관리 모듈

뷰 쿼리가 실행되는 콘텐츠 DB 연결 (SQLAlchemy)
"""
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from views_stratify.core.exceptions import DatabaseError


class Base(DeclarativeBase):
    """ORM Base 클래스 (뷰 base table 메타데이터 보관)"""


def engine_options(connection_string: str, pool_size: int, pool_timeout: int) -> dict[str, Any]:
    """
    URL 종류별 create_engine 옵션

    - 인메모리 SQLite: 커넥션 하나를 공유해야 세션 간 데이터가 유지됨 (StaticPool)
    - 파일 SQLite: DB 파일 디렉토리 생성, 풀 크기 옵션 없음
    - 그 외: 커넥션 풀
    """
    url = make_url(connection_string)
    if url.get_backend_name() != "sqlite":
        return {"pool_size": pool_size, "pool_timeout": pool_timeout}

    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return options


class DatabaseManager:
    """
    데이터베이스 연결 관리자 (싱글톤)

    사용법:
        db = DatabaseManager("sqlite:///data/content.db")
        db.create_all_tables()

        with db.session() as session:
            session.execute(text("SELECT 1"))
    """

    _instance: "DatabaseManager | None" = None

    def __new__(cls, *args, **kwargs) -> "DatabaseManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(
        self,
        connection_string: str | None = None,
        pool_size: int = 5,
        pool_timeout: int = 30,
        echo: bool = False,
    ):
        if self._initialized:
            return

        self._connection_string = connection_string
        self._pool_size = pool_size
        self._pool_timeout = pool_timeout
        self._echo = echo

        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None
        self._initialized = True

    @property
    def engine(self) -> Engine:
        """SQLAlchemy 엔진 (최초 접근 시 생성)"""
        if self._engine is None:
            if not self._connection_string:
                raise DatabaseError("데이터베이스 연결 문자열이 설정되지 않았습니다")

            try:
                options = engine_options(self._connection_string, self._pool_size, self._pool_timeout)
                self._engine = create_engine(self._connection_string, echo=self._echo, **options)
            except SQLAlchemyError as e:
                raise DatabaseError(
                    f"엔진 생성 실패: {e}", {"url": self._connection_string}
                ) from e

        return self._engine

    def get_session(self) -> Session:
        """새 세션 반환 (호출자가 close)"""
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine)
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        세션 컨텍스트 매니저 (정상 종료 시 커밋, 예외 시 롤백 후 DatabaseError)

        사용법:
            with db.session() as session:
                session.add(NodeModel(title="..."))
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            raise DatabaseError(f"데이터베이스 작업 실패: {e}") from e
        finally:
            session.close()

    def create_all_tables(self) -> None:
        """ORM 모델 기반 테이블 생성"""
        from views_stratify.core import models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def drop_all_tables(self) -> None:
        Base.metadata.drop_all(self.engine)

    def table_names(self) -> list[str]:
        """DB에 실제로 존재하는 테이블 이름"""
        return sorted(inspect(self.engine).get_table_names())

    def health_check(self) -> bool:
        """연결 상태 확인"""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, DatabaseError):
            return False
        return True

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    @classmethod
    def reset(cls) -> None:
        """싱글톤 인스턴스 리셋 (테스트용)"""
        if cls._instance:
            cls._instance.close()
        cls._instance = None


def get_database() -> DatabaseManager:
    """DatabaseManager 인스턴스 반환"""
    return DatabaseManager()


def init_database_from_config(create_tables: bool | None = None) -> DatabaseManager:
    """
    설정 파일의 database 섹션으로 초기화

    Args:
        create_tables: ORM 모델 테이블 생성 여부 (None이면 database.create_tables, 기본 True)
    """
    from views_stratify.core.config import get_config

    db_config = get_config().get_section("database")
    db = DatabaseManager(
        connection_string=db_config.get("url"),
        pool_size=db_config.get("pool_size", 5),
        pool_timeout=db_config.get("pool_timeout", 30),
        echo=db_config.get("echo", False),
    )

    if create_tables is None:
        create_tables = db_config.get("create_tables", True)
    if create_tables:
        db.create_all_tables()
    return db

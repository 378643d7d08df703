"""
데이터베이스 모델 정의

뷰의 base table로 쓰이는 콘텐츠 엔티티 테이블 (SQLAlchemy ORM)
"""
from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, ForeignKey

from views_stratify.core.database import Base


# ============================================
# 노드 (콘텐츠)
# ============================================
class NodeModel(Base):
    """노드 테이블"""
    __tablename__ = "node_field_data"

    nid = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False, default="article")
    title = Column(String(255), nullable=False)
    tag = Column(String(64), default="")  # 단일 태그 (예: Featured)
    uid = Column(Integer, ForeignKey("users_field_data.uid"), nullable=True)
    status = Column(Boolean, default=True)
    sticky = Column(Boolean, default=False)
    created = Column(DateTime, default=datetime.now)

    def __repr__(self):
        return f"<Node {self.nid}: {self.title}>"


# ============================================
# 사용자
# ============================================
class UserModel(Base):
    """사용자 테이블"""
    __tablename__ = "users_field_data"

    uid = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(60), nullable=False, unique=True)
    status = Column(Boolean, default=True)
    created = Column(DateTime, default=datetime.now)

    def __repr__(self):
        return f"<User {self.uid}: {self.name}>"


# ============================================
# 분류 용어
# ============================================
class TaxonomyTermModel(Base):
    """분류 용어 테이블"""
    __tablename__ = "taxonomy_term_field_data"

    tid = Column(Integer, primary_key=True, autoincrement=True)
    vid = Column(String(32), nullable=False)  # 어휘(vocabulary) 이름
    name = Column(String(255), nullable=False)
    weight = Column(Integer, default=0)

    def __repr__(self):
        return f"<Term {self.tid}: {self.name}>"


# ============================================
# 미디어
# ============================================
class MediaModel(Base):
    """미디어 테이블"""
    __tablename__ = "media_field_data"

    mid = Column(Integer, primary_key=True, autoincrement=True)
    bundle = Column(String(32), nullable=False, default="image")
    name = Column(String(255), nullable=False)
    status = Column(Boolean, default=True)


# ============================================
# 댓글
# ============================================
class CommentModel(Base):
    """댓글 테이블"""
    __tablename__ = "comment_field_data"

    cid = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(Integer, ForeignKey("node_field_data.nid"), nullable=False)
    uid = Column(Integer, ForeignKey("users_field_data.uid"), nullable=True)
    subject = Column(String(64), default="")
    comment_body = Column(Text, default="")
    status = Column(Boolean, default=True)

from sqlalchemy import Column, String, ForeignKey, Index

from models.base_model import BaseModel, Base

MAX_POST_LENGTH = 140


class Post(BaseModel, Base):
    __tablename__ = "posts"

    body = Column(String(MAX_POST_LENGTH), nullable=False)
    # Posts go away with their author (admin reset deletes users in bulk)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        Index("ix_posts_created_at", "created_at"),
    )

"""Database table definitions for threads and the posts within them"""

from datetime import datetime
from typing import List, Optional

from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, Text, String


class Thread(SQLModel, table=True):
    """A thread on a board; its first post is the opening post"""
    __tablename__ = "threads"
    id: Optional[int] = Field(default=None, primary_key=True)
    board: str = Field(..., sa_column=Column(String(32), nullable=False, index=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    posts: List["Post"] = Relationship(back_populates="thread")


class Post(SQLModel, table=True):
    """A post: the submitted source text and the HTML rendered from it"""
    __tablename__ = "posts"
    id: Optional[int] = Field(default=None, primary_key=True)
    thread_id: int = Field(..., foreign_key="threads.id", index=True, nullable=False)
    body: str = Field(..., sa_column=Column(Text, nullable=False))
    body_html: str = Field(..., sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    thread: Optional[Thread] = Relationship(back_populates="posts")

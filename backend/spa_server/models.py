"""SQLAlchemy ORM models."""

from sqlalchemy import Boolean, Column, Integer, Text

from spa_server.database import Base


class Todo(Base):
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, nullable=False)
    description = Column(Text, nullable=False)
    done = Column(Boolean, nullable=False, default=False, server_default="0")

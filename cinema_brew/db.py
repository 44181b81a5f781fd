# cinema_brew/db.py
import datetime
from typing import Iterator

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker

from cinema_brew.config import config

if config.database_url.startswith("sqlite"):
    engine = create_engine(
        config.database_url,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
    )
else:
    engine = create_engine(config.database_url, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"
    id: int = Column(Integer, primary_key=True)
    username: str = Column(String(255), unique=True, nullable=False)
    password: str = Column(String(255), nullable=False)  # bcrypt hash
    projects = relationship("Project", back_populates="user")


class Project(Base):
    __tablename__ = "projects"
    id: int = Column(Integer, primary_key=True)
    user_id: int = Column(Integer, ForeignKey("users.id"), nullable=False)
    concept: str = Column(Text, nullable=False)
    data: str = Column(Text, nullable=False)  # serialized production package
    created_at: datetime.datetime = Column(DateTime, nullable=False, default=_utcnow)
    user = relationship("User", back_populates="projects")


def init_db() -> None:
    """Create tables if they don't exist yet."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

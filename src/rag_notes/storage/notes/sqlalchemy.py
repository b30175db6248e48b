"""
SQLAlchemy-based note storage implementation.

Works with any SQLAlchemy-compatible database (SQLite, PostgreSQL, MySQL,
etc.). Sessions are synchronous; every public method runs its database work
in a worker thread so callers on the event loop are never blocked.
"""

import asyncio
import json
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import Column, DateTime, Engine, Index, Integer, String, Text, create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base
from sqlalchemy.pool import StaticPool

from rag_notes.models import Note

logger = logging.getLogger(__name__)

Base = declarative_base()


class NoteDB(Base):
    """SQLAlchemy model for the notes table."""

    __tablename__ = "notes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    metadata_json = Column("metadata", Text, nullable=False, default="{}")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    idempotency_key = Column(String, nullable=True, unique=True)

    __table_args__ = (Index("idx_notes_created_at", "created_at"),)

    def to_note(self) -> Note:
        """Convert database model to Note."""
        metadata = json.loads(self.metadata_json) if self.metadata_json else {}

        return Note(
            id=str(self.id),
            text=self.text,
            metadata=metadata,
            created_at=self.created_at,
            idempotency_key=self.idempotency_key,
        )


def create_note_engine(url: str) -> Engine:
    """
    Create an engine suitable for use from worker threads.

    In-memory SQLite databases exist per connection, so they get a single
    shared connection.
    """
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    return create_engine(url, pool_pre_ping=True)


def _parse_ids(note_ids: Iterable[str]) -> List[int]:
    parsed = []
    for note_id in note_ids:
        try:
            parsed.append(int(note_id))
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric note id: {note_id!r}")
    return parsed


class SQLAlchemyNoteStore:
    """
    SQLAlchemy-based record store.

    Example:
        engine = create_note_engine("sqlite:///notes.db")
        store = SQLAlchemyNoteStore(engine)
        store.create_tables()
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        logger.info(f"SQLAlchemyNoteStore initialized (engine={engine.url})")

    @contextmanager
    def _session(self):
        """Context manager for database sessions with automatic commit/rollback."""
        session = Session(self.engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            session.close()

    def create_tables(self):
        """Create database tables if they don't exist."""
        Base.metadata.create_all(self.engine)
        logger.info("Database tables created/verified")

    def _find_by_key(self, session: Session, idempotency_key: str) -> Optional[NoteDB]:
        return session.query(NoteDB).filter(NoteDB.idempotency_key == idempotency_key).first()

    def _create(
        self, text: str, metadata: Dict[str, Any], idempotency_key: Optional[str]
    ) -> Note:
        if idempotency_key:
            with self._session() as session:
                existing = self._find_by_key(session, idempotency_key)
                if existing is not None:
                    logger.info(f"Note for key {idempotency_key} already exists: {existing.id}")
                    return existing.to_note()

        try:
            with self._session() as session:
                db_note = NoteDB(
                    text=text,
                    metadata_json=json.dumps(metadata),
                    created_at=datetime.now(),
                    idempotency_key=idempotency_key,
                )
                session.add(db_note)
                session.flush()
                note = db_note.to_note()
        except IntegrityError:
            # A concurrent create with the same key won the insert
            if not idempotency_key:
                raise
            with self._session() as session:
                existing = self._find_by_key(session, idempotency_key)
                if existing is None:
                    raise
                return existing.to_note()

        logger.debug(f"Inserted note {note.id}: '{text[:50]}...'")
        return note

    async def create(
        self,
        text: str,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Note:
        return await asyncio.to_thread(self._create, text, dict(metadata or {}), idempotency_key)

    def _get_many(self, note_ids: List[int]) -> List[Note]:
        with self._session() as session:
            rows = session.query(NoteDB).filter(NoteDB.id.in_(note_ids)).all()
            return [row.to_note() for row in rows]

    async def get(self, note_id: str) -> Optional[Note]:
        notes = await self.get_many([note_id])
        return notes[0] if notes else None

    async def get_many(self, note_ids: Iterable[str]) -> List[Note]:
        """Fetch all requested notes with one ``WHERE id IN (...)`` query."""
        parsed = _parse_ids(note_ids)
        if not parsed:
            return []
        return await asyncio.to_thread(self._get_many, parsed)

    def _delete(self, note_id: int) -> bool:
        with self._session() as session:
            deleted = session.query(NoteDB).filter(NoteDB.id == note_id).delete()
            return deleted > 0

    async def delete(self, note_id: str) -> bool:
        parsed = _parse_ids([note_id])
        if not parsed:
            return False
        deleted = await asyncio.to_thread(self._delete, parsed[0])
        logger.debug(f"Deleted note {note_id}: {deleted}")
        return deleted

    def _count(self) -> int:
        with self._session() as session:
            return session.query(NoteDB).count()

    async def count(self) -> int:
        return await asyncio.to_thread(self._count)

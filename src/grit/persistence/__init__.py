"""Persistence layer for imported fighters."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from grit.models import Fighter


logger = logging.getLogger(__name__)


@dataclass
class BulkImportResult:
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)


class FighterStore:
    """Simple SQLite-backed store for fighter profiles."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("GRIT_DB_PATH")
        if env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            try:
                conn = sqlite3.connect(self.db_path)
            except sqlite3.OperationalError:
                fallback_dir = Path(tempfile.gettempdir()) / "grit-runtime"
                fallback_dir.mkdir(parents=True, exist_ok=True)
                fallback = fallback_dir / "grit.sqlite"
                logger.warning("Cannot open %s, falling back to %s", self.db_path, fallback)
                conn = sqlite3.connect(fallback)
                self.db_path = fallback
                self._create_schema(conn)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS fighters (
                id TEXT PRIMARY KEY,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                organization TEXT NOT NULL,
                weight_class TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def upsert_fighters(self, fighters: Iterable[Fighter]) -> BulkImportResult:
        """Insert new fighters and overwrite ones whose id already exists."""

        result = BulkImportResult()
        now = datetime.now(timezone.utc).isoformat()
        with closing(self._connect()) as conn, conn:
            for fighter in fighters:
                payload = fighter.model_dump_json(by_alias=True)
                exists = conn.execute(
                    "SELECT 1 FROM fighters WHERE id = ?", (fighter.id,)
                ).fetchone()
                if exists:
                    conn.execute(
                        """
                        UPDATE fighters
                        SET first_name = ?, last_name = ?, organization = ?,
                            weight_class = ?, payload_json = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            fighter.first_name,
                            fighter.last_name,
                            fighter.organization.value,
                            fighter.weight_class.value,
                            payload,
                            now,
                            fighter.id,
                        ),
                    )
                    result.updated.append(fighter.id)
                else:
                    conn.execute(
                        """
                        INSERT INTO fighters (
                            id, first_name, last_name, organization, weight_class,
                            payload_json, created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            fighter.id,
                            fighter.first_name,
                            fighter.last_name,
                            fighter.organization.value,
                            fighter.weight_class.value,
                            payload,
                            now,
                            now,
                        ),
                    )
                    result.created.append(fighter.id)
            conn.commit()
        logger.info(
            "Stored fighters: %d created, %d updated", len(result.created), len(result.updated)
        )
        return result

    def get_fighter(self, fighter_id: str) -> Optional[Fighter]:
        with closing(self._connect()) as conn, conn:
            row = conn.execute(
                "SELECT payload_json FROM fighters WHERE id = ?", (fighter_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_fighter(row)

    def list_fighters(self, limit: Optional[int] = 500) -> List[Fighter]:
        """Return stored fighters ordered by name; ``limit=None`` returns all."""

        query = "SELECT payload_json FROM fighters ORDER BY last_name, first_name"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        with closing(self._connect()) as conn, conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_fighter(row) for row in rows]

    def delete_fighter(self, fighter_id: str) -> bool:
        with closing(self._connect()) as conn, conn:
            cur = conn.execute("DELETE FROM fighters WHERE id = ?", (fighter_id,))
            conn.commit()
            return cur.rowcount > 0

    def _row_to_fighter(self, row: sqlite3.Row) -> Fighter:
        return Fighter.model_validate(json.loads(row["payload_json"]))

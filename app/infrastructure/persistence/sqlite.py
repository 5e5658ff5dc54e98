import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ...domain.errors import EmailAlreadyRegisteredError, UserNotFoundError
from ...domain.models import User, VerificationToken
from ...domain.ports.persistence import PersistenceGateway


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    activated INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS account_verification_tokens (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    token TEXT NOT NULL UNIQUE,
                    user_id INTEGER NOT NULL UNIQUE,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
                );
                """
            )

    def close(self) -> None:
        self._conn.close()

    # UserRepository API ----------------------------------------------------
    def create_user(self, name: str, email: str, password_hash: str) -> User:
        normalized = email.lower()
        now = self._now()
        try:
            with self._lock, self._conn:
                cur = self._conn.execute(
                    """
                    INSERT INTO users (name, email, password_hash, activated, created_at, updated_at)
                    VALUES (?, ?, ?, 0, ?, ?)
                    """,
                    (name, normalized, password_hash, now, now),
                )
                user_id = cur.lastrowid
                cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            if "users.email" in str(exc):
                raise EmailAlreadyRegisteredError("Email already registered") from exc
            raise
        if not row:
            raise RuntimeError("Failed to persist user.")
        return self._row_to_user(row)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE email = ?", (email.lower(),))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            cur = self._conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    # VerificationTokenRepository API ---------------------------------------
    def replace_token(self, user_id: int, token: str) -> VerificationToken:
        now = self._now()
        try:
            with self._lock, self._conn:
                self._conn.execute(
                    """
                    INSERT INTO account_verification_tokens (token, user_id, created_at, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET
                        token = excluded.token,
                        created_at = excluded.created_at,
                        updated_at = excluded.updated_at
                    """,
                    (token, user_id, now, now),
                )
                cur = self._conn.execute(
                    "SELECT * FROM account_verification_tokens WHERE user_id = ?", (user_id,)
                )
                row = cur.fetchone()
        except sqlite3.IntegrityError as exc:
            if "FOREIGN KEY" in str(exc):
                raise UserNotFoundError(user_id) from exc
            raise
        if not row:
            raise RuntimeError("Failed to persist verification token.")
        return self._row_to_token(row)

    def consume_token(self, token: str, not_before: Optional[str] = None) -> Optional[int]:
        query = "SELECT id, user_id FROM account_verification_tokens WHERE token = ?"
        params = [token]
        if not_before:
            query += " AND created_at >= ?"
            params.append(not_before)
        with self._lock, self._conn:
            cur = self._conn.execute(query, params)
            row = cur.fetchone()
            if not row:
                return None
            # The delete is conditional on the row still existing, so only one
            # caller can win even when another process shares the database file.
            cur = self._conn.execute(
                "DELETE FROM account_verification_tokens WHERE id = ? AND token = ?",
                (row["id"], token),
            )
            if cur.rowcount != 1:
                return None
            self._conn.execute(
                "UPDATE users SET activated = 1, updated_at = ? WHERE id = ?",
                (self._now(), row["user_id"]),
            )
        return row["user_id"]

    def get_token_for_user(self, user_id: int) -> Optional[VerificationToken]:
        with self._lock:
            cur = self._conn.execute(
                "SELECT * FROM account_verification_tokens WHERE user_id = ?", (user_id,)
            )
            row = cur.fetchone()
        return self._row_to_token(row) if row else None

    def purge_tokens_older_than(self, iso_timestamp: str) -> int:
        with self._lock, self._conn:
            cur = self._conn.execute(
                "DELETE FROM account_verification_tokens WHERE created_at < ?", (iso_timestamp,)
            )
            return cur.rowcount

    # Helpers ----------------------------------------------------------------
    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    @staticmethod
    def _parse_datetime(value: str) -> datetime:
        try:
            result = datetime.fromisoformat(value)
        except ValueError:
            # Fallback for legacy formats without 'T'
            result = datetime.strptime(value, "%Y-%m-%d %H:%M:%S")
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_user(self, row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            activated=bool(row["activated"]),
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

    def _row_to_token(self, row: sqlite3.Row) -> VerificationToken:
        return VerificationToken(
            id=row["id"],
            token=row["token"],
            user_id=row["user_id"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
        )

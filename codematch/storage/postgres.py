"""
PostgreSQL store.

One connection per operation, RealDictCursor rows, JSONB for list and
object columns. Tables are created on first use.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional, Tuple

import psycopg2
from psycopg2.extras import Json, RealDictCursor

from codematch.matching.models import Match, MatchProfile
from codematch.points.models import DailyPoints, PointsEvent

from .base import MatchStore, StoreUnavailableError

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS match_profiles (
        user_id VARCHAR(64) PRIMARY KEY,
        is_active BOOLEAN NOT NULL DEFAULT FALSE,
        age INTEGER,
        gender VARCHAR(32),
        location VARCHAR(64),
        programming_language JSONB NOT NULL DEFAULT '[]'::jsonb,
        level VARCHAR(20),
        preferences JSONB NOT NULL DEFAULT '{}'::jsonb,
        onboarding_answers JSONB NOT NULL DEFAULT '{}'::jsonb,
        biography TEXT NOT NULL DEFAULT '',
        profile_image_url TEXT NOT NULL DEFAULT '',
        created_at TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_match_profiles_active
        ON match_profiles(is_active);

    CREATE TABLE IF NOT EXISTS matches (
        match_id VARCHAR(64) PRIMARY KEY,
        user_a VARCHAR(64) NOT NULL,
        user_b VARCHAR(64) NOT NULL,
        status VARCHAR(16) NOT NULL DEFAULT 'pending',
        score INTEGER NOT NULL DEFAULT 0,
        initiated_by VARCHAR(64) NOT NULL,
        created_at TIMESTAMP NOT NULL,
        updated_at TIMESTAMP NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_matches_user_a ON matches(user_a);
    CREATE INDEX IF NOT EXISTS idx_matches_user_b ON matches(user_b);

    CREATE TABLE IF NOT EXISTS points_events (
        event_id VARCHAR(64) PRIMARY KEY,
        username VARCHAR(255) NOT NULL,
        change_amount INTEGER NOT NULL,
        reason VARCHAR(32) NOT NULL,
        created_at TIMESTAMP NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_points_events_username
        ON points_events(username);

    CREATE TABLE IF NOT EXISTS daily_points (
        username VARCHAR(255) NOT NULL,
        day DATE NOT NULL,
        total_gained INTEGER NOT NULL DEFAULT 0,
        total_lost INTEGER NOT NULL DEFAULT 0,
        net_change INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (username, day)
    );
"""


class PostgresMatchStore(MatchStore):

    backend = "postgres"

    def __init__(self, database_url: str):
        self._db_url = database_url
        self._schema_ready = False

    def _get_conn(self):
        try:
            conn = psycopg2.connect(self._db_url, cursor_factory=RealDictCursor)
        except psycopg2.Error as e:
            logger.error(f"Database connection failed: {e}")
            raise StoreUnavailableError(str(e)) from e

        if not self._schema_ready:
            try:
                with conn, conn.cursor() as cur:
                    cur.execute(SCHEMA_SQL)
            except psycopg2.Error as e:
                conn.close()
                logger.error(f"Schema bootstrap failed: {e}")
                raise StoreUnavailableError(str(e)) from e
            self._schema_ready = True
        return conn

    def _fetch_one(self, sql: str, params: tuple) -> Optional[dict]:
        conn = self._get_conn()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchone()
        finally:
            conn.close()

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[dict]:
        conn = self._get_conn()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall()
        finally:
            conn.close()

    def _execute(self, sql: str, params: tuple) -> None:
        conn = self._get_conn()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
        finally:
            conn.close()

    def ping(self) -> bool:
        try:
            self._fetch_one("SELECT 1 AS ok", ())
            return True
        except StoreUnavailableError:
            return False

    # Profiles

    def get_profile(self, user_id: str) -> Optional[MatchProfile]:
        row = self._fetch_one(
            "SELECT * FROM match_profiles WHERE user_id = %s", (user_id,)
        )
        return MatchProfile(**row) if row else None

    def list_profiles(self) -> List[MatchProfile]:
        rows = self._fetch_all("SELECT * FROM match_profiles ORDER BY created_at NULLS FIRST, user_id")
        return [MatchProfile(**row) for row in rows]

    def save_profile(self, profile: MatchProfile) -> MatchProfile:
        data = profile.model_dump(mode="json")
        self._execute(
            """
            INSERT INTO match_profiles (
                user_id, is_active, age, gender, location, programming_language,
                level, preferences, onboarding_answers, biography,
                profile_image_url, created_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (user_id) DO UPDATE SET
                is_active = EXCLUDED.is_active,
                age = EXCLUDED.age,
                gender = EXCLUDED.gender,
                location = EXCLUDED.location,
                programming_language = EXCLUDED.programming_language,
                level = EXCLUDED.level,
                preferences = EXCLUDED.preferences,
                onboarding_answers = EXCLUDED.onboarding_answers,
                biography = EXCLUDED.biography,
                profile_image_url = EXCLUDED.profile_image_url
            """,
            (
                profile.user_id,
                profile.is_active,
                profile.age,
                profile.gender,
                profile.location,
                Json(data["programming_language"]),
                data["level"],
                Json(data["preferences"]),
                Json(data["onboarding_answers"]),
                profile.biography,
                profile.profile_image_url,
                profile.created_at,
            ),
        )
        return profile

    # Matches

    def get_match(self, match_id: str) -> Optional[Match]:
        row = self._fetch_one("SELECT * FROM matches WHERE match_id = %s", (match_id,))
        return Match(**row) if row else None

    def list_matches_for_user(self, user_id: str) -> List[Match]:
        rows = self._fetch_all(
            "SELECT * FROM matches WHERE user_a = %s OR user_b = %s ORDER BY created_at",
            (user_id, user_id),
        )
        return [Match(**row) for row in rows]

    def save_match(self, match: Match) -> Match:
        self._execute(
            """
            INSERT INTO matches (
                match_id, user_a, user_b, status, score, initiated_by,
                created_at, updated_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (match_id) DO UPDATE SET
                status = EXCLUDED.status,
                score = EXCLUDED.score,
                updated_at = EXCLUDED.updated_at
            """,
            (
                match.match_id,
                match.user_a,
                match.user_b,
                match.status.value,
                match.score,
                match.initiated_by,
                match.created_at,
                match.updated_at,
            ),
        )
        return match

    def delete_match(self, match_id: str) -> Optional[Match]:
        row = self._fetch_one(
            "DELETE FROM matches WHERE match_id = %s RETURNING *", (match_id,)
        )
        return Match(**row) if row else None

    # Points

    def add_points_event(self, event: PointsEvent) -> PointsEvent:
        self._execute(
            """
            INSERT INTO points_events (event_id, username, change_amount, reason, created_at)
            VALUES (%s, %s, %s, %s, %s)
            """,
            (
                event.event_id,
                event.username,
                event.change_amount,
                event.reason.value,
                event.created_at,
            ),
        )
        return event

    def list_points_events(self, username: str) -> List[PointsEvent]:
        rows = self._fetch_all(
            "SELECT * FROM points_events WHERE username = %s ORDER BY created_at",
            (username,),
        )
        return [PointsEvent(**row) for row in rows]

    def get_daily_points(self, username: str, day: date) -> Optional[DailyPoints]:
        row = self._fetch_one(
            "SELECT * FROM daily_points WHERE username = %s AND day = %s",
            (username, day),
        )
        return DailyPoints(**row) if row else None

    def apply_daily_change(
        self,
        username: str,
        day: date,
        change_fn: Callable[[DailyPoints], Tuple[Any, DailyPoints]],
    ) -> Tuple[Any, DailyPoints]:
        # Row lock held until commit serializes concurrent changes
        conn = self._get_conn()
        try:
            with conn, conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO daily_points (username, day)
                    VALUES (%s, %s)
                    ON CONFLICT (username, day) DO NOTHING
                    """,
                    (username, day),
                )
                cur.execute(
                    """
                    SELECT * FROM daily_points
                    WHERE username = %s AND day = %s
                    FOR UPDATE
                    """,
                    (username, day),
                )
                current = DailyPoints(**cur.fetchone())

                result, updated = change_fn(current.model_copy())

                if updated != current:
                    cur.execute(
                        """
                        UPDATE daily_points
                        SET total_gained = %s, total_lost = %s, net_change = %s
                        WHERE username = %s AND day = %s
                        """,
                        (
                            updated.total_gained,
                            updated.total_lost,
                            updated.net_change,
                            username,
                            day,
                        ),
                    )
            return result, updated
        finally:
            conn.close()

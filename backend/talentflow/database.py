import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def get_engine(db_path: Path):
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def make_sessionmaker(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


# Candidate and job references are deliberately not foreign keys: a candidate
# may point at a job id that does not exist.
SCHEMA_SQL = """\
-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    title      TEXT NOT NULL,
    slug       TEXT NOT NULL UNIQUE CHECK(length(slug) > 0),
    status     TEXT NOT NULL DEFAULT 'active'
               CHECK(status IN ('active','archived')),
    tags       TEXT NOT NULL DEFAULT '[]',
    "order"    INTEGER NOT NULL CHECK("order" > 0),
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_jobs_order ON jobs("order");
CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs(status);

-- ============================================================
-- CANDIDATES
-- ============================================================
CREATE TABLE IF NOT EXISTS candidates (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL,
    email      TEXT NOT NULL,
    stage      TEXT NOT NULL
               CHECK(stage IN ('applied','screen','tech','offer','hired','rejected')),
    job_id     INTEGER NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_candidates_stage ON candidates(stage);
CREATE INDEX IF NOT EXISTS idx_candidates_job ON candidates(job_id);

-- ============================================================
-- CANDIDATE TIMELINE (append-only)
-- ============================================================
CREATE TABLE IF NOT EXISTS candidate_timeline (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    candidate_id INTEGER NOT NULL,
    stage        TEXT NOT NULL
                 CHECK(stage IN ('applied','screen','tech','offer','hired','rejected')),
    timestamp    TEXT NOT NULL,
    notes        TEXT
);

CREATE INDEX IF NOT EXISTS idx_timeline_candidate ON candidate_timeline(candidate_id, timestamp);

-- ============================================================
-- ASSESSMENTS
-- ============================================================
CREATE TABLE IF NOT EXISTS assessments (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    job_id     INTEGER NOT NULL,
    title      TEXT NOT NULL,
    sections   TEXT NOT NULL DEFAULT '[]',
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_assessments_job ON assessments(job_id);

-- ============================================================
-- ASSESSMENT RESPONSES
-- ============================================================
CREATE TABLE IF NOT EXISTS assessment_responses (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    assessment_id  INTEGER NOT NULL,
    candidate_id   INTEGER NOT NULL,
    responses      TEXT NOT NULL DEFAULT '{}',
    candidate_info TEXT,
    submitted_at   TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_responses_assessment ON assessment_responses(assessment_id);
"""


def init_db(db_path: Path):
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.executescript(SCHEMA_SQL)
    conn.close()

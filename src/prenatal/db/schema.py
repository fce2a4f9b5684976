"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Tracked pregnancies; the most recent row is the active one
CREATE TABLE IF NOT EXISTS pregnancies (
    pregnancy_id INTEGER PRIMARY KEY AUTOINCREMENT,
    due_date DATE NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Medication / supplement reminders
CREATE TABLE IF NOT EXISTS reminders (
    reminder_id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    dosage TEXT NOT NULL DEFAULT '',
    frequency TEXT NOT NULL DEFAULT 'DAILY'
        CHECK(frequency IN ('DAILY', 'TWICE_DAILY', 'THREE_TIMES_DAILY')),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Times of day for each reminder (1-3, ordered by position)
CREATE TABLE IF NOT EXISTS reminder_times (
    reminder_id INTEGER NOT NULL,
    position INTEGER NOT NULL,
    time_of_day TEXT NOT NULL,
    PRIMARY KEY (reminder_id, position),
    UNIQUE(reminder_id, time_of_day),
    FOREIGN KEY (reminder_id) REFERENCES reminders(reminder_id)
);

-- Intake log; one row per reminder, day and time
CREATE TABLE IF NOT EXISTS intake_log (
    log_id INTEGER PRIMARY KEY AUTOINCREMENT,
    reminder_id INTEGER NOT NULL,
    log_date DATE NOT NULL,
    time_of_day TEXT NOT NULL,
    taken BOOLEAN NOT NULL DEFAULT TRUE,
    notes TEXT,
    logged_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE(reminder_id, log_date, time_of_day),
    FOREIGN KEY (reminder_id) REFERENCES reminders(reminder_id)
);

CREATE INDEX IF NOT EXISTS idx_intake_log_date ON intake_log(log_date);

-- Kick counter sessions
CREATE TABLE IF NOT EXISTS kick_sessions (
    session_id INTEGER PRIMARY KEY AUTOINCREMENT,
    pregnancy_id INTEGER,
    count INTEGER NOT NULL CHECK(count >= 0),
    duration_minutes INTEGER NOT NULL,
    started_at TIMESTAMP NOT NULL,
    completed_at TIMESTAMP NOT NULL,
    notes TEXT,
    FOREIGN KEY (pregnancy_id) REFERENCES pregnancies(pregnancy_id)
);

CREATE INDEX IF NOT EXISTS idx_kick_sessions_started ON kick_sessions(started_at);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL

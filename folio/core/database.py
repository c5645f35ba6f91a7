import os
import sqlite3
from contextlib import contextmanager


# Collection tables. Ids are opaque uuid hex strings assigned by the gateway.
SCHEMA = {
    'projects': '''
        CREATE TABLE IF NOT EXISTS projects (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL CHECK (length(trim(title)) > 0),
            description TEXT NOT NULL CHECK (length(trim(description)) > 0),
            long_description TEXT,
            image_url TEXT,
            tech_stack TEXT NOT NULL DEFAULT '[]',
            live_url TEXT,
            github_url TEXT,
            featured INTEGER NOT NULL DEFAULT 0,
            order_index INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''',
    'site_settings': '''
        CREATE TABLE IF NOT EXISTS site_settings (
            id TEXT PRIMARY KEY,
            hero_image_url TEXT,
            hero_title TEXT,
            hero_subtitle TEXT,
            bio TEXT,
            location TEXT,
            availability TEXT,
            email TEXT,
            github_url TEXT,
            linkedin_url TEXT,
            twitter_url TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''',
    'skills': '''
        CREATE TABLE IF NOT EXISTS skills (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL CHECK (length(trim(name)) > 0),
            category TEXT NOT NULL CHECK (length(trim(category)) > 0),
            proficiency INTEGER NOT NULL DEFAULT 80
                CHECK (proficiency BETWEEN 0 AND 100),
            order_index INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''',
    'users': '''
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''',
    'user_roles': '''
        CREATE TABLE IF NOT EXISTS user_roles (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            role TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(user_id, role)
        )
    ''',
}

INDEXES = [
    'CREATE INDEX IF NOT EXISTS idx_projects_order ON projects(order_index)',
    'CREATE INDEX IF NOT EXISTS idx_skills_category ON skills(category, order_index)',
    'CREATE INDEX IF NOT EXISTS idx_user_roles_user ON user_roles(user_id, role)',
]

# Columns stored as JSON text / integer flags
JSON_COLUMNS = {
    'projects': {'tech_stack'},
}
BOOL_COLUMNS = {
    'projects': {'featured'},
}


class Database:

    @staticmethod
    @contextmanager
    def connect(path):
        """Open a connection with dict-like rows; commits on success, always closes"""
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @staticmethod
    def init_schema(path):
        """Create every collection table and index if missing"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with Database.connect(path) as conn:
            cursor = conn.cursor()
            for ddl in SCHEMA.values():
                cursor.execute(ddl)
            for ddl in INDEXES:
                cursor.execute(ddl)

    @staticmethod
    def get_columns(conn, table):
        """Column names of *table*, in declaration order"""
        cursor = conn.cursor()
        cursor.execute(f"PRAGMA table_info({table})")
        return [column[1] for column in cursor.fetchall()]

"""
SQLite Record Store
===================

DataGateway backed by one SQLite table per collection.
"""

import json
import sqlite3
import uuid

from .database import Database, JSON_COLUMNS, BOOL_COLUMNS
from .errors import NotFoundError, TransientFetchError, ValidationError
from .gateways import DataGateway
from .logging_service import LoggingService


class SqliteDataGateway(DataGateway):
    """Record store over a single SQLite database file"""

    def __init__(self, db_path):
        self.db_path = db_path
        self._columns = {}

    def init_schema(self):
        Database.init_schema(self.db_path)
        self._columns = {}

    # ===== Row encoding =====

    def _get_columns(self, conn, collection):
        if collection not in self._columns:
            columns = Database.get_columns(conn, collection)
            if not columns:
                raise ValidationError(f"Unknown collection: {collection}")
            self._columns[collection] = columns
        return self._columns[collection]

    def _check_fields(self, conn, collection, fields):
        columns = self._get_columns(conn, collection)
        unknown = [f for f in fields if f not in columns]
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for {collection}: {', '.join(sorted(unknown))}"
            )

    @staticmethod
    def _encode(collection, record):
        encoded = {}
        for key, value in record.items():
            if key in JSON_COLUMNS.get(collection, ()) and value is not None:
                value = json.dumps(list(value))
            elif key in BOOL_COLUMNS.get(collection, ()) and value is not None:
                value = 1 if value else 0
            encoded[key] = value
        return encoded

    @staticmethod
    def _decode(collection, row):
        record = dict(row)
        for key in JSON_COLUMNS.get(collection, ()):
            if record.get(key) is not None:
                try:
                    record[key] = json.loads(record[key])
                except (TypeError, ValueError):
                    record[key] = []
        for key in BOOL_COLUMNS.get(collection, ()):
            if key in record:
                record[key] = bool(record[key])
        return record

    # ===== DataGateway =====

    async def list(self, collection, order_by=None, filters=None):
        try:
            with Database.connect(self.db_path) as conn:
                filters = filters or {}
                order_by = order_by or []
                self._check_fields(conn, collection, list(filters) + [f for f, _ in order_by])

                params = []
                where = ''
                if filters:
                    conditions = []
                    for field, value in self._encode(collection, filters).items():
                        conditions.append(f'{field} = ?')
                        params.append(value)
                    where = f' WHERE {" AND ".join(conditions)}'

                order = ''
                if order_by:
                    order = ' ORDER BY ' + ', '.join(
                        f'{field} {"ASC" if ascending else "DESC"}' for field, ascending in order_by
                    )

                cursor = conn.cursor()
                cursor.execute(f'SELECT * FROM {collection}{where}{order}', params)
                return [self._decode(collection, row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise TransientFetchError(f"Failed to list {collection}: {e}") from e

    async def get_singleton(self, collection):
        try:
            with Database.connect(self.db_path) as conn:
                self._get_columns(conn, collection)
                cursor = conn.cursor()
                cursor.execute(f'SELECT * FROM {collection} ORDER BY created_at, rowid LIMIT 2')
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise TransientFetchError(f"Failed to read {collection}: {e}") from e

        if not rows:
            return None
        if len(rows) > 1:
            LoggingService.warning(collection, "More than one row in singleton collection; using the oldest")
        return self._decode(collection, rows[0])

    async def insert(self, collection, record):
        record = {k: v for k, v in record.items() if k not in ('id', 'created_at', 'updated_at')}
        record_id = uuid.uuid4().hex
        try:
            with Database.connect(self.db_path) as conn:
                self._check_fields(conn, collection, record)
                encoded = self._encode(collection, record)
                encoded['id'] = record_id
                columns = ', '.join(encoded)
                placeholders = ', '.join('?' for _ in encoded)
                cursor = conn.cursor()
                cursor.execute(
                    f'INSERT INTO {collection} ({columns}) VALUES ({placeholders})',
                    list(encoded.values())
                )
                cursor.execute(f'SELECT * FROM {collection} WHERE id = ?', (record_id,))
                return self._decode(collection, cursor.fetchone())
        except sqlite3.IntegrityError as e:
            raise ValidationError(str(e)) from e
        except sqlite3.Error as e:
            raise TransientFetchError(f"Failed to insert into {collection}: {e}") from e

    async def update(self, collection, record_id, fields):
        fields = {k: v for k, v in fields.items() if k not in ('id', 'created_at', 'updated_at')}
        try:
            with Database.connect(self.db_path) as conn:
                self._check_fields(conn, collection, fields)
                encoded = self._encode(collection, fields)
                assignments = [f'{field} = ?' for field in encoded]
                assignments.append('updated_at = CURRENT_TIMESTAMP')
                cursor = conn.cursor()
                cursor.execute(
                    f'UPDATE {collection} SET {", ".join(assignments)} WHERE id = ?',
                    list(encoded.values()) + [record_id]
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"No {collection} record with id {record_id}")
        except sqlite3.IntegrityError as e:
            raise ValidationError(str(e)) from e
        except sqlite3.Error as e:
            raise TransientFetchError(f"Failed to update {collection}: {e}") from e

    async def delete(self, collection, record_id):
        try:
            with Database.connect(self.db_path) as conn:
                self._get_columns(conn, collection)
                cursor = conn.cursor()
                cursor.execute(f'DELETE FROM {collection} WHERE id = ?', (record_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError(f"No {collection} record with id {record_id}")
        except sqlite3.Error as e:
            raise TransientFetchError(f"Failed to delete from {collection}: {e}") from e

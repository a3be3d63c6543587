import os
import sqlite3


class Database:

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @staticmethod
    def ensure_dir(path):
        """Create the parent directory of a database file (only if there's a directory component)"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    @staticmethod
    def rows_to_dicts(cursor, rows):
        """Map fetched rows onto the column names of the last query"""
        columns = [column[0] for column in cursor.description]
        return [dict(zip(columns, row)) for row in rows]

    @staticmethod
    def row_to_dict(cursor, row):
        if row is None:
            return None
        columns = [column[0] for column in cursor.description]
        return dict(zip(columns, row))

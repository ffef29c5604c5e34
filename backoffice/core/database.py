import os
import sqlite3


class Database:

    @staticmethod
    def connect(path):
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return sqlite3.connect(path)

    @staticmethod
    def ensure_dir(path):
        """Create a database directory if it doesn't exist yet"""
        if path:
            os.makedirs(path, exist_ok=True)
        return path

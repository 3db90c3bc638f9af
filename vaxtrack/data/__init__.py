# data/__init__.py
"""
Data layer for MongoDB operations.
One repository module per collection, sharing the connection in `connection.py`.
"""

from .connection import (close_connection, ensure_indexes, get_collection,
                         get_database, set_client)
from .utils import serialize, to_object_id

__all__ = [
	# Connection
	'get_database',
	'get_collection',
	'close_connection',
	'set_client',
	'ensure_indexes',
	# Document helpers
	'serialize',
	'to_object_id',
]

"""DB session dependencies (composition root).

Read routes depend on get_db; write routes on get_db_transactional so all
repositories in one request share a single transaction.
"""

from app.infrastructure.persistence.database import get_db, get_db_transactional

__all__ = ["get_db", "get_db_transactional"]

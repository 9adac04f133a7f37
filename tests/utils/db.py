# tests/utils/db.py
from app.db.gateway import PersistenceGateway


def count_rows(gateway: PersistenceGateway, model, **filters) -> int:
    """Row count read through a fresh session, soft-deleted rows included."""
    with gateway.session() as db:
        return db.query(model).filter_by(**filters).count()


def fetch_row(gateway: PersistenceGateway, model, id):
    with gateway.session() as db:
        return db.get(model, id)

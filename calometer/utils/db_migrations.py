import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

BALANCE_TABLE = "user_caloric_balance"
BALANCE_INDEX = "uq_caloric_balance_log_idx"


def _has_unique_log_key(engine: Engine) -> bool:
    inspector = inspect(engine)
    for constraint in inspector.get_unique_constraints(BALANCE_TABLE):
        if constraint["column_names"] == ["calorie_log_id"]:
            return True
    for index in inspector.get_indexes(BALANCE_TABLE):
        if index.get("unique") and index["column_names"] == ["calorie_log_id"]:
            return True
    return False


def ensure_caloric_balance_unique_log(engine: Engine) -> None:
    """Give older databases at most one caloric balance row per calorie log.

    Rows inserted before the key existed may repeat a log; the most recent
    row per log is kept.
    """
    inspector = inspect(engine)
    if BALANCE_TABLE not in inspector.get_table_names():
        return
    if _has_unique_log_key(engine):
        return

    with engine.begin() as connection:
        removed = connection.execute(
            text(
                f"DELETE FROM {BALANCE_TABLE} "
                f"WHERE id NOT IN (SELECT MAX(id) FROM {BALANCE_TABLE} GROUP BY calorie_log_id)"
            )
        ).rowcount
        connection.execute(
            text(f"CREATE UNIQUE INDEX {BALANCE_INDEX} ON {BALANCE_TABLE} (calorie_log_id)")
        )
    logger.info("Added unique caloric balance key, removed %s duplicate rows", removed)

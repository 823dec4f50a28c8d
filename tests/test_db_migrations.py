import pytest
from sqlalchemy import create_engine, inspect, text

from calometer.utils.db_migrations import BALANCE_INDEX, ensure_caloric_balance_unique_log


@pytest.fixture()
def legacy_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TABLE user_caloric_balance ("
                "id INTEGER PRIMARY KEY, calorie_log_id INTEGER NOT NULL, caloric_balance FLOAT)"
            )
        )
        connection.execute(
            text(
                "INSERT INTO user_caloric_balance (id, calorie_log_id, caloric_balance) "
                "VALUES (1, 7, 100.0), (2, 7, 250.0), (3, 8, -40.0)"
            )
        )
    yield engine
    engine.dispose()


def test_duplicates_are_collapsed_and_key_added(legacy_engine):
    ensure_caloric_balance_unique_log(legacy_engine)

    with legacy_engine.connect() as connection:
        rows = connection.execute(
            text("SELECT calorie_log_id, caloric_balance FROM user_caloric_balance ORDER BY calorie_log_id")
        ).all()
    assert [tuple(row) for row in rows] == [(7, 250.0), (8, -40.0)]

    indexes = inspect(legacy_engine).get_indexes("user_caloric_balance")
    assert any(index["name"] == BALANCE_INDEX and index["unique"] for index in indexes)


def test_running_twice_is_a_no_op(legacy_engine):
    ensure_caloric_balance_unique_log(legacy_engine)
    ensure_caloric_balance_unique_log(legacy_engine)

    indexes = inspect(legacy_engine).get_indexes("user_caloric_balance")
    assert [index["name"] for index in indexes] == [BALANCE_INDEX]


def test_missing_table_is_left_alone(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")

    ensure_caloric_balance_unique_log(engine)

    assert inspect(engine).get_table_names() == []
    engine.dispose()

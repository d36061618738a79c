from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from ethfetcher.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLedgerUnitOfWork,
    StartupError,
    configured_engine,
    database_health,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.ledger import make_hash, make_record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert not is_started()
    with pytest.raises(StartupError):
        SqlAlchemyLedgerUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_reads_database_uri_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    startup()

    engine = configured_engine()
    assert engine is not None
    assert engine.dialect.name == "sqlite"


def test_unit_of_work_persists_records(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    record = make_record(make_hash(3), block_number=12)
    record.value = 2**255

    with SqlAlchemyLedgerUnitOfWork() as uow:
        uow.repositories.transactions.add(record)
        uow.commit()

    with SqlAlchemyLedgerUnitOfWork() as uow:
        loaded = uow.repositories.transactions.get_by_hashes([make_hash(3)])

    assert len(loaded) == 1
    assert loaded[0].transaction_hash == make_hash(3)
    assert loaded[0].value == 2**255
    assert loaded[0].block_number == 12


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyLedgerUnitOfWork() as uow:
        uow.repositories.transactions.add(make_record(make_hash(4)))
        raise RuntimeError("boom")

    with SqlAlchemyLedgerUnitOfWork() as uow:
        assert uow.repositories.transactions.list_all() == []


def test_session_is_closed_after_exit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyLedgerUnitOfWork()

    with uow:
        pass

    with pytest.raises(StartupError):
        _ = uow.session


def test_database_health_reports_status(sqlite_engine: Engine) -> None:
    assert database_health()["status"] == "down"

    startup(engine=sqlite_engine, force=True)
    health = database_health()

    assert health["status"] == "up"
    assert health["dialect"] == "sqlite"

from unittest import mock

import pytest

import carelink.core.database as database


def test_get_db_closes_session_after_request(monkeypatch):
    session = mock.MagicMock()
    monkeypatch.setattr(database, "SessionLocal", lambda: session)

    gen = database.get_db()
    assert next(gen) is session
    gen.close()

    session.close.assert_called_once()
    session.rollback.assert_not_called()


def test_get_db_rolls_back_and_closes_on_error(monkeypatch):
    session = mock.MagicMock()
    monkeypatch.setattr(database, "SessionLocal", lambda: session)

    gen = database.get_db()
    next(gen)
    with pytest.raises(RuntimeError):
        gen.throw(RuntimeError("query failed"))

    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_session_scope_commits_or_rolls_back(monkeypatch):
    session = mock.MagicMock()
    monkeypatch.setattr(database, "SessionLocal", lambda: session)

    with database.session_scope():
        pass
    session.commit.assert_called_once()
    session.close.assert_called_once()

    session.reset_mock()
    with pytest.raises(ValueError):
        with database.session_scope():
            raise ValueError("bad row")
    session.commit.assert_not_called()
    session.rollback.assert_called_once()
    session.close.assert_called_once()


def test_connection_check_against_sqlite():
    assert database.test_connection() is True

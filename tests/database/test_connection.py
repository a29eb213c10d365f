import mysql.connector

from src.faceclock.faceclock.database.connection import DBConfig, DatabaseConnection

SETTINGS = {"host": "db.local", "user": "faceclock", "password": "s3cret", "database": "faceclock_db"}


def test_from_dict_defaults_port():
    config = DBConfig.from_dict(SETTINGS)
    assert config.port == 3306
    assert config.target == "faceclock@db.local:3306/faceclock_db"
    assert "s3cret" not in config.target


def test_connect_selects_database(monkeypatch):
    calls = []
    monkeypatch.setattr(mysql.connector, "connect", lambda **kwargs: calls.append(kwargs) or object())

    db = DatabaseConnection.from_settings({**SETTINGS, "port": "3307"})
    db.connect()
    db.connect(with_database=False)

    assert calls[0]["database"] == "faceclock_db"
    assert calls[0]["port"] == 3307
    assert "database" not in calls[1]
    assert calls[1]["password"] == "s3cret"

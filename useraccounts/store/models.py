"""Database models for user accounts."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from pytz import UTC
from sqlalchemy import Column, DateTime, Integer, String, Text, text

db: SQLAlchemy = SQLAlchemy()


def _utcnow() -> datetime:
    """Naive UTC; DATETIME columns do not carry a zone."""
    return datetime.now(tz=UTC).replace(tzinfo=None)


class DBUser(db.Model):  # type: ignore
    """
    User accounts.

    +---------------------+--------------+------+-----+-------------------+
    | Field               | Type         | Null | Key | Default           |
    +---------------------+--------------+------+-----+-------------------+
    | id                  | int(11)      | NO   | PRI | NULL              |
    | first_name          | varchar(250) | YES  |     | NULL              |
    | last_name           | varchar(250) | YES  |     | NULL              |
    | email               | varchar(255) | NO   | UNI | NULL              |
    | password_hash       | text         | NO   |     | NULL              |
    | api_key             | varchar(64)  | NO   | UNI | NULL              |
    | age                 | varchar(16)  | YES  |     | NULL              |
    | phone               | varchar(32)  | YES  |     | NULL              |
    | birthdate           | varchar(32)  | YES  |     | NULL              |
    | gender              | varchar(16)  | YES  |     | NULL              |
    | profile_picture_uri | varchar(255) | YES  |     | NULL              |
    | status              | int(1)       | NO   |     | 1                 |
    | created_at          | datetime     | NO   |     | CURRENT_TIMESTAMP |
    +---------------------+--------------+------+-----+-------------------+
    """

    __tablename__ = 'users'

    ACTIVE = 1

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(250))
    last_name = Column(String(250))
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    api_key = Column(String(64), nullable=False, unique=True)
    """Bearer credential; rotated whenever the password changes."""
    age = Column(String(16))
    phone = Column(String(32))
    birthdate = Column(String(32))
    gender = Column(String(16))
    profile_picture_uri = Column(String(255))
    status = Column(Integer, nullable=False, server_default=text("'1'"))
    created_at = Column(DateTime, nullable=False, default=_utcnow)

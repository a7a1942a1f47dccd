from datetime import datetime
from .database import db


class StoredValue(db.Model):
    """Key-value row standing in for on-device persistent storage."""

    __tablename__ = 'local_storage'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<StoredValue {self.key}>'


def get_value(key, default=None):
    row = db.session.get(StoredValue, key)
    return row.value if row else default


def set_value(key, value):
    row = db.session.get(StoredValue, key)
    if row:
        row.value = value
    else:
        db.session.add(StoredValue(key=key, value=value))
    db.session.commit()


def delete_value(key):
    row = db.session.get(StoredValue, key)
    if row:
        db.session.delete(row)
        db.session.commit()

from .database import db
from .stored_value import StoredValue, get_value, set_value, delete_value
from .registration import Registration
from .class_session import ClassSession, CLASS_SESSIONS, get_class_session

__all__ = [
    'db', 'StoredValue', 'get_value', 'set_value', 'delete_value',
    'Registration', 'ClassSession', 'CLASS_SESSIONS', 'get_class_session',
]

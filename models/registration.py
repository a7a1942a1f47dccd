import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registration:
    """One student booked into one class session."""

    id: str
    student_name: str
    line_id: str
    class_id: str
    class_name: str
    class_date: str             # ISO string, as stored by the spreadsheet
    is_paid: bool
    payment_last5: Optional[str] = None
    timestamp: int = 0          # Creation time in epoch milliseconds

    @classmethod
    def create(cls, student_name, line_id, session, is_paid, payment_last5=None, timestamp=None):
        """Build a new registration for a class session."""
        return cls(
            id=str(uuid.uuid4()),
            student_name=student_name,
            line_id=line_id,
            class_id=session.id,
            class_name=session.name,
            class_date=session.date,
            is_paid=is_paid,
            payment_last5=payment_last5 if is_paid else None,
            timestamp=timestamp if timestamp is not None else now_millis(),
        )

    def class_day(self, tz_name: Optional[str] = None) -> str:
        """Return the YYYY-MM-DD the class takes place on.

        Rows read back from the spreadsheet carry full UTC timestamps
        (midnight local time shifted to UTC), so aware values are converted
        into the studio's time zone before taking the date.
        """
        value = self.class_date or ''
        if 'T' not in value:
            return value[:10]
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return value.split('T')[0]
        if parsed.tzinfo is not None and tz_name:
            parsed = parsed.astimezone(ZoneInfo(tz_name))
        return parsed.date().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'studentName': self.student_name,
            'lineId': self.line_id,
            'classId': self.class_id,
            'className': self.class_name,
            'classDate': self.class_date,
            'isPaid': self.is_paid,
            'timestamp': self.timestamp,
        }
        if self.payment_last5:
            data['paymentLast5'] = self.payment_last5
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Registration':
        """Parse a wire record, tolerating the spreadsheet's conversions."""
        if not isinstance(data, dict):
            raise ValueError(f'Registration must be an object, got {type(data).__name__}')
        if not data.get('id'):
            raise ValueError('Registration is missing an id')
        return cls(
            id=str(data['id']),
            student_name=str(data.get('studentName') or ''),
            line_id=str(data.get('lineId') or ''),
            class_id=str(data.get('classId') or ''),
            class_name=str(data.get('className') or ''),
            class_date=str(data.get('classDate') or ''),
            is_paid=_parse_bool(data.get('isPaid')),
            payment_last5=_parse_last5(data.get('paymentLast5')),
            timestamp=_parse_timestamp(data.get('timestamp')),
        )


def now_millis() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def registrations_from_list(rows) -> List[Registration]:
    """Parse a list of wire records, skipping rows that cannot be read."""
    registrations = []
    for row in rows:
        try:
            registrations.append(Registration.from_dict(row))
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning("Skipping malformed registration row: %s", e)
    return registrations


def registrations_to_list(registrations) -> List[Dict[str, Any]]:
    return [reg.to_dict() for reg in registrations]


def _parse_bool(value):
    if isinstance(value, str):
        return value.strip().upper() == 'TRUE'
    return bool(value)


def _parse_last5(value):
    if value is None or value == '':
        return None
    if isinstance(value, (int, float)):
        # Sheets turns "01234" into the number 1234
        return str(int(value)).zfill(5)
    return str(value).lstrip("'")


def _parse_timestamp(value):
    if value is None or value == '':
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if not isinstance(value, str):
        raise ValueError(f'Unsupported timestamp type: {type(value).__name__}')
    try:
        return int(value)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ClassSession:
    """A single scheduled class the students can book."""
    id: str
    name: str
    date: str           # ISO date, e.g. "2026-01-09"
    time_display: str   # e.g. "19:30 - 21:00"
    instructor: str = 'Sophie'

    @property
    def weekday(self):
        return date.fromisoformat(self.date).weekday()

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'date': self.date,
            'timeDisplay': self.time_display,
            'instructor': self.instructor,
        }


TERM_YEAR = 2026

YIN_CLASS_NAME = '修復陰瑜伽 (Restorative Yin) - 教室二'
HATHA_EVENING_CLASS_NAME = '哈達瑜珈 (Hatha Yoga) - 教室二'
HATHA_MORNING_CLASS_NAME = '哈達瑜珈 (Hatha Yoga) - 教室一'

# Term calendar - (month, day) pairs per course
# Restorative Yin: Friday mornings
YIN_DATES = [(1, 9), (1, 16), (1, 23), (1, 30), (2, 6), (2, 27)]
# Hatha: Monday / Wednesday evenings
HATHA_EVENING_DATES = [
    (1, 5), (1, 7), (1, 12), (1, 14), (1, 19), (1, 21), (1, 28),
    (2, 2), (2, 4), (2, 9), (2, 11),
]
# Hatha: Thursday mornings
HATHA_MORNING_DATES = [(1, 8), (1, 15), (1, 22), (1, 29), (2, 5), (2, 12)]


def _build_sessions(prefix, name, dates, time_display):
    return [
        ClassSession(
            id=f'{prefix}-{idx}',
            name=name,
            date=date(TERM_YEAR, month, day).isoformat(),
            time_display=time_display,
        )
        for idx, (month, day) in enumerate(dates)
    ]


CLASS_SESSIONS = sorted(
    _build_sessions('yin', YIN_CLASS_NAME, YIN_DATES, '09:20 - 10:50')
    + _build_sessions('hatha-pm', HATHA_EVENING_CLASS_NAME, HATHA_EVENING_DATES, '19:30 - 21:00')
    + _build_sessions('hatha-am', HATHA_MORNING_CLASS_NAME, HATHA_MORNING_DATES, '10:00 - 11:30'),
    key=lambda s: s.date
)

_SESSIONS_BY_ID = {s.id: s for s in CLASS_SESSIONS}


def get_class_session(session_id):
    """Get a class session by id."""
    return _SESSIONS_BY_ID.get(session_id, None)


def sessions_in_family(keyword):
    """Sessions whose name contains keyword, e.g. '陰瑜伽' or '哈達'."""
    return [s for s in CLASS_SESSIONS if keyword in s.name]


def calculate_fee(session_ids, price_per_class):
    return len(set(session_ids)) * price_per_class

import csv
import io
from datetime import date
from typing import Dict, List

from models.registration import Registration

# (label, key) in export order
CSV_HEADERS = [
    ('課程日期', 'classDate'),
    ('課程名稱', 'className'),
    ('學員姓名', 'studentName'),
    ('Line ID', 'lineId'),
    ('付款狀態', 'paymentStatus'),
    ('帳號末五碼', 'paymentLast5'),
]

PAID_LABEL = '已付款'
UNPAID_LABEL = '未付款'


def format_class_date(day: str) -> str:
    """'2026-01-09' -> '2026/1/9', the studio's locale date format."""
    try:
        d = date.fromisoformat(day)
    except ValueError:
        return day
    return f'{d.year}/{d.month}/{d.day}'


def export_filename(today=None):
    today = today or date.today()
    return f'yoga_registrations_{today.isoformat()}.csv'


def build_registrations_csv(registrations: List[Registration], tz_name=None) -> bytes:
    """Render registrations as a UTF-8 (with BOM) CSV document."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow([label for label, _ in CSV_HEADERS])

    for reg in registrations:
        writer.writerow([
            format_class_date(reg.class_day(tz_name)),
            reg.class_name,
            reg.student_name,
            reg.line_id,
            PAID_LABEL if reg.is_paid else UNPAID_LABEL,
            # Leading apostrophe keeps spreadsheet apps from dropping zeros
            f"'{reg.payment_last5}" if reg.payment_last5 else '',
        ])

    return output.getvalue().encode('utf-8-sig')


def parse_registrations_csv(data: bytes) -> List[Dict[str, str]]:
    """Read an exported CSV back into rows keyed by column key."""
    reader = csv.reader(io.StringIO(data.decode('utf-8-sig')))
    header = next(reader, None)
    expected = [label for label, _ in CSV_HEADERS]
    if header != expected:
        raise ValueError(f'Unexpected CSV header: {header}')

    keys = [key for _, key in CSV_HEADERS]
    rows = []
    for values in reader:
        if not values:
            continue
        row = dict(zip(keys, values))
        row['paymentLast5'] = row.get('paymentLast5', '').lstrip("'")
        rows.append(row)
    return rows

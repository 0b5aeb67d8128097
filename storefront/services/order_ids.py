"""
Order identifiers

Compact format: MonthCode + DayOfWeekCode + DD + NN, e.g. ``BA0801`` is
the first order on Sunday 8 February. Month codes run A-L (Jan-Dec), day
codes A-G (Sun-Sat). NN is at least two digits and widens past the 99th
order of a day (``BA08100``).
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MONTH_CODES = "ABCDEFGHIJKL"
DAY_CODES = "ABCDEFG"
DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_COMPACT_ID = re.compile(r"^[A-L][A-G]\d{4,}$")


@dataclass
class ParsedOrderId:
    month: str
    day_of_week: str
    date: str
    bill_number: str


def generate_order_id(existing_orders_today: int = 0, now: Optional[datetime] = None) -> str:
    """Build the compact id for the next order of the day"""
    now = now or datetime.now()
    month_code = MONTH_CODES[now.month - 1]
    # isoweekday(): Monday=1 .. Sunday=7, codes start at Sunday
    day_code = DAY_CODES[now.isoweekday() % 7]
    return f"{month_code}{day_code}{now.day:02d}{existing_orders_today + 1:02d}"


def parse_order_id(order_id: str) -> Optional[ParsedOrderId]:
    if len(order_id) < 6:
        return None

    month_index = MONTH_CODES.find(order_id[0])
    day_index = DAY_CODES.find(order_id[1])
    if month_index == -1 or day_index == -1:
        return None

    return ParsedOrderId(
        month=calendar.month_name[month_index + 1],
        day_of_week=DAY_NAMES[day_index],
        date=order_id[2:4],
        bill_number=order_id[4:],
    )


def order_id_for_display(order_id: str) -> str:
    """Compact ids are shown as-is; anything else (a UUID) is shortened"""
    if _COMPACT_ID.match(order_id):
        return order_id
    return order_id[:8].upper()

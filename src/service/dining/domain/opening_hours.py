"""
Operating-hours containment.

Requested reservation times and restaurant hours are compared on wall-clock
time of day at minute resolution; the date and any seconds are dropped. The
window is inclusive on both ends and does not wrap past midnight, so a
restaurant with close earlier than open accepts no reservation at all.
"""

from datetime import datetime, time


def to_minute_of_day(value: datetime | time) -> time:
    return time(hour=value.hour, minute=value.minute)


def is_within_operating_hours(*, requested: datetime, open_time: time, close_time: time) -> bool:
    requested_time = to_minute_of_day(requested)
    return to_minute_of_day(open_time) <= requested_time <= to_minute_of_day(close_time)

# app/core/clock.py
from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


# Wall clock dependency; tests override it to pin the time of day
def get_clock() -> Clock:
    return datetime.now

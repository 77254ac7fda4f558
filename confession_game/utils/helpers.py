# confession_game/utils/helpers.py
import time


def now_ms() -> int:
    """Current time as epoch milliseconds, the unit stored in redis and returned in debugLog."""
    return int(time.time() * 1000)

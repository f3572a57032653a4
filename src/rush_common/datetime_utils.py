"""Clock helpers.

Bet timestamps are unix seconds, matching oracle publish times. Operations
take a Clock so tests can pin the current instant.
"""

import time
from collections.abc import Callable

Clock = Callable[[], int]


def unix_now() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())

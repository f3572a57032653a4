from src.rush_common.errors import TooEarlyError, WindowExpiredError


def check_resolve_window(bet_id: int, resolve_at: int, window: int, now: int) -> None:
    """Resolvable iff resolve_at <= now <= resolve_at + window."""
    if now < resolve_at:
        raise TooEarlyError(bet_id, resolve_at, now)
    deadline = resolve_at + window
    if now > deadline:
        raise WindowExpiredError(bet_id, deadline, now)

"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Liquidity (house pool, wallets)
  3xxx: Bet validation
  4xxx: Timing
  5xxx: Oracle
  6xxx: Execution (swap)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired credentials", 401)


class NotAuthorizedError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(1002, f"Caller {caller} is not the house operator", 403)


# --- 2xxx: Liquidity ---

class InsufficientHouseFundsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient house funds: required {required}, available {available}",
            422,
        )


class InsufficientWalletBalanceError(AppError):
    def __init__(self, holder: str, asset: str, required: int, available: int) -> None:
        super().__init__(
            2002,
            f"Insufficient {asset} balance for {holder}: "
            f"required {required}, available {available}",
            422,
        )


# --- 3xxx: Bet validation ---

class InvalidAssetError(AppError):
    def __init__(self, asset: str) -> None:
        super().__init__(3001, f"Unsupported asset: {asset}", 422)


class BetTooSmallError(AppError):
    def __init__(self, stake: int, minimum: int) -> None:
        super().__init__(3002, f"Bet too small: {stake} < {minimum}", 422)


class BetTooLargeError(AppError):
    def __init__(self, stake: int, maximum: int) -> None:
        super().__init__(3003, f"Bet too large: {stake} > {maximum}", 422)


class BetNotFoundError(AppError):
    def __init__(self, bet_id: int) -> None:
        super().__init__(3004, f"Bet not found: {bet_id}", 404)


class BetAlreadyResolvedError(AppError):
    def __init__(self, bet_id: int) -> None:
        super().__init__(3005, f"Bet already resolved: {bet_id}", 409)


# --- 4xxx: Timing ---

class TooEarlyError(AppError):
    def __init__(self, bet_id: int, resolve_at: int, now: int) -> None:
        super().__init__(
            4001,
            f"Bet {bet_id} cannot be resolved before {resolve_at} (now {now})",
            422,
        )


class WindowExpiredError(AppError):
    def __init__(self, bet_id: int, deadline: int, now: int) -> None:
        super().__init__(
            4002,
            f"Resolve window for bet {bet_id} closed at {deadline} (now {now})",
            422,
        )


# --- 5xxx: Oracle ---

class OracleUpdateFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5001, f"Oracle update failed: {detail}", 502)


class StalePriceError(AppError):
    def __init__(self, feed_id: str, publish_time: int, max_age: int) -> None:
        super().__init__(
            5002,
            f"Price for {feed_id} published at {publish_time} is older than {max_age}s",
            422,
        )


class PriceOutOfWindowError(AppError):
    def __init__(self, feed_id: str, lower: int, upper: int) -> None:
        super().__init__(
            5003,
            f"No price for {feed_id} published within [{lower}, {upper}]",
            422,
        )


# --- 6xxx: Execution ---

class SwapFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, f"Swap failed: {detail}", 502)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class ReentrantCallError(AppError):
    def __init__(self, operation: str) -> None:
        super().__init__(9003, f"Re-entrant call into {operation} rejected", 409)

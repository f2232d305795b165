# discord_scraper/utils/snowflake.py
from __future__ import annotations

from datetime import datetime, timezone

DISCORD_EPOCH = 1420070400000  # 2015-01-01 UTC (ms)


def snowflake_to_datetime(snowflake: int | str) -> datetime:
    ms = (int(snowflake) >> 22) + DISCORD_EPOCH
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def is_older(snowflake: int | str, than: int | str) -> bool:
    """Return True if `snowflake` was created before `than`.

    IDs arrive as strings; they must be compared numerically, since string
    order breaks once IDs differ in length.
    """
    return int(snowflake) < int(than)

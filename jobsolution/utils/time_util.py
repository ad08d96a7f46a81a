from datetime import datetime, timezone


def utcnow() -> datetime:
    # Columns are stored as naive UTC timestamps
    return datetime.now(timezone.utc).replace(tzinfo=None)

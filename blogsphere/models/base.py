from datetime import datetime, timezone


def utcnow():
    # naive UTC, como lo guarda SQLite
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None

from .base import Base, BaseModel, TimeStamp, as_utc, utcnow

__all__ = [
    "Base",
    "BaseModel",
    "TimeStamp",
    "as_utc",
    "utcnow",
]

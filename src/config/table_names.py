from enum import Enum


class TableNames(str, Enum):
    GUESTS = "guests"
    TABLES = "tables"
    RSVP_TOKENS = "rsvp_tokens"

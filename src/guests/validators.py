"""Field rules shared by the write models.

The routers validate request bodies with pydantic first; these checks run
again inside the write models so the CLI and any other caller get the same
rules before anything reaches the database.
"""

from src.guests.dtos import (
    MAX_CAPACITY,
    MAX_DIETARY_LENGTH,
    MAX_PEOPLE,
    MIN_CAPACITY,
    MIN_PEOPLE,
    GuestStatus,
    ValidationFailedError,
)


def _required(field: str, value: str | None, max_length: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationFailedError(field, "This field is required")
    if len(value) > max_length:
        raise ValidationFailedError(field, f"Must be at most {max_length} characters")
    return value


def _optional(field: str, value: str | None, max_length: int) -> str | None:
    value = (value or "").strip()
    if not value:
        return None
    if len(value) > max_length:
        raise ValidationFailedError(field, f"Must be at most {max_length} characters")
    return value


def normalize_party_size(status: GuestStatus, number_of_people: int) -> int:
    """Declined guests always count for zero people; everyone else for 1..20."""
    if status == GuestStatus.DECLINED:
        return 0
    if not MIN_PEOPLE <= number_of_people <= MAX_PEOPLE:
        raise ValidationFailedError(
            "number_of_people",
            f"The number of people must be between {MIN_PEOPLE} and {MAX_PEOPLE}",
        )
    return number_of_people


def normalize_dietary(status: GuestStatus, dietary_restrictions: str | None) -> str | None:
    if status == GuestStatus.DECLINED:
        return None
    return _optional("dietary_restrictions", dietary_restrictions, MAX_DIETARY_LENGTH)


def validate_guest_fields(
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    group_family: str | None,
) -> tuple[str, str, str, str | None]:
    first_name = _required("first_name", first_name, 100)
    last_name = _required("last_name", last_name, 100)
    email = _required("email", email, 200)
    if "@" not in email:
        raise ValidationFailedError("email", "Invalid email address")
    return first_name, last_name, email, _optional("group_family", group_family, 100)


def validate_table_fields(
    name: str | None,
    capacity: int,
    description: str | None,
) -> tuple[str, int, str | None]:
    name = _required("name", name, 100)
    if not MIN_CAPACITY <= capacity <= MAX_CAPACITY:
        raise ValidationFailedError(
            "capacity", f"Capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}"
        )
    return name, capacity, _optional("description", description, 200)

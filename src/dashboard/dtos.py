from dataclasses import dataclass, field

from src.guests.dtos import GuestDTO, TableDTO


def percentage(part: int, whole: int) -> float:
    return part * 100.0 / whole if whole > 0 else 0.0


@dataclass(frozen=True)
class DashboardDTO:
    total_guests: int = 0
    total_people: int = 0
    confirmed_guests: int = 0
    confirmed_people: int = 0
    declined_guests: int = 0
    declined_people: int = 0
    pending_guests: int = 0
    pending_people: int = 0

    total_tables: int = 0
    total_seats: int = 0
    occupied_seats: int = 0

    recent_responses: list[GuestDTO] = field(default_factory=list)
    pending_guests_list: list[GuestDTO] = field(default_factory=list)
    over_capacity_tables: list[TableDTO] = field(default_factory=list)

    @property
    def available_seats(self) -> int:
        return self.total_seats - self.occupied_seats

    @property
    def confirmation_rate(self) -> float:
        return percentage(self.confirmed_guests, self.total_guests)

    @property
    def seating_occupancy(self) -> float:
        return percentage(self.occupied_seats, self.total_seats)


@dataclass(frozen=True)
class GuestStatsDTO:
    total: int = 0
    total_people: int = 0
    confirmed: int = 0
    confirmed_people: int = 0
    declined: int = 0
    pending: int = 0

    @property
    def confirmation_rate(self) -> float:
        return round(percentage(self.confirmed, self.total), 1)


@dataclass(frozen=True)
class TableStatsDTO:
    total: int = 0
    total_capacity: int = 0
    occupied: int = 0
    over_capacity: int = 0

    @property
    def available(self) -> int:
        return self.total_capacity - self.occupied


@dataclass(frozen=True)
class GroupStatsDTO:
    group: str
    count: int
    total_people: int
    confirmed: int


@dataclass(frozen=True)
class StatsDTO:
    guests: GuestStatsDTO
    tables: TableStatsDTO
    by_group: list[GroupStatsDTO] = field(default_factory=list)

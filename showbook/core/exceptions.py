from typing import Iterable


def _format_seats(seats: Iterable[int]) -> str:
    return ", ".join(str(seat) for seat in seats)


class ShowbookError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ShowNotFoundError(ShowbookError):
    def __init__(self, show_id: str):
        self.show_id = show_id
        super().__init__(f"Show {show_id} not found", status_code=404)


class DuplicateShowError(ShowbookError):
    def __init__(self, show_id: str):
        self.show_id = show_id
        super().__init__(f"Show {show_id} already exists", status_code=409)


class InvalidReferenceError(ShowbookError):
    def __init__(self, show_id: str):
        self.show_id = show_id
        super().__init__(f"Invalid show_id {show_id}", status_code=400)


class InvalidSeatRangeError(ShowbookError):
    def __init__(self, message: str, seats: Iterable[int] = ()):
        self.seats = list(seats)
        super().__init__(message, status_code=400)

    @classmethod
    def out_of_range(cls, seats: Iterable[int], total_seats: int):
        seats = list(seats)
        return cls(f"Invalid seats requested: {_format_seats(seats)} (valid range is 1-{total_seats})", seats)


class SeatConflictError(ShowbookError):
    def __init__(self, seats: Iterable[int]):
        self.seats = list(seats)
        super().__init__(f"Some seats already booked: {_format_seats(self.seats)}", status_code=409)


class ResetNotAllowedError(ShowbookError):
    def __init__(self):
        super().__init__("Reset is disabled in this environment", status_code=403)

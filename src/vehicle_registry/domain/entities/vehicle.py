"""Vehicle entity."""

from typing import Optional

from ..constants import MAX_INTEGER, MAX_TEXT_LENGTH, MIN_INTEGER
from ..exceptions import ValidationError


def _validate_text(field_name: str, value: Optional[str]) -> str:
    """Check a required text field and return it stripped.

    Surrounding whitespace is not part of the value: blank and length checks
    apply to the stripped text and the stripped text is what gets stored.
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    if len(value) > MAX_TEXT_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_TEXT_LENGTH} characters")
    return value


def _validate_year(year: Optional[int]) -> int:
    # bool is an int subclass but never a valid year
    if year is None or isinstance(year, bool) or not isinstance(year, int):
        raise ValidationError("Year is required and must be an integer")
    if not MIN_INTEGER <= year <= MAX_INTEGER:
        raise ValidationError(f"Year must be between {MIN_INTEGER} and {MAX_INTEGER}")
    return year


class Vehicle:
    """Vehicle record managed by the registry.

    The id is ``None`` until the vehicle has been stored; the store assigns it
    on insert and it never changes afterwards.
    """

    def __init__(
        self,
        make: str,
        model: str,
        year: int,
        vehicle_id: Optional[int] = None
    ):
        self._id = vehicle_id
        self._make = _validate_text("Make", make)
        self._model = _validate_text("Model", model)
        self._year = _validate_year(year)

    @property
    def id(self) -> Optional[int]:
        """Get vehicle ID."""
        return self._id

    @property
    def make(self) -> str:
        """Get vehicle make."""
        return self._make

    @property
    def model(self) -> str:
        """Get vehicle model."""
        return self._model

    @property
    def year(self) -> int:
        """Get vehicle year."""
        return self._year

    def assign_id(self, vehicle_id: int) -> None:
        """Record the id assigned by the store."""
        if self._id is not None and self._id != vehicle_id:
            raise ValueError(f"Vehicle already has id {self._id}")
        self._id = vehicle_id

    def replace_details(self, make: str, model: str, year: int) -> None:
        """Replace make, model and year wholesale, keeping the id."""
        new_make = _validate_text("Make", make)
        new_model = _validate_text("Model", model)
        new_year = _validate_year(year)
        self._make = new_make
        self._model = new_model
        self._year = new_year

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vehicle):
            return False
        return (
            self.id == other.id
            and self.make == other.make
            and self.model == other.model
            and self.year == other.year
        )

    def __hash__(self) -> int:
        return hash((self.id, self.make, self.model, self.year))

    def __str__(self) -> str:
        return f"Vehicle({self.id}, {self.make} {self.model} {self.year})"

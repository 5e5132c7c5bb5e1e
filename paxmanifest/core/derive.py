"""
Derived passenger attributes.

Infers the fare bracket (ADULT/CHILD/INFANT) and the salutation title from
the date of birth and gender on a record.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from paxmanifest.core.dates import parse_record_date
from paxmanifest.core.schema import PassengerType

INFANT_MAX_AGE = 2
CHILD_MAX_AGE = 12
MARRIED_TITLE_MIN_AGE = 30


@dataclass(frozen=True)
class DerivedAttributes:
    """Result of attribute derivation."""

    passenger_type: PassengerType
    title: str


UNDERIVABLE = DerivedAttributes(passenger_type=PassengerType.ADULT, title="")


def calculate_age(birth_date: date, today: date) -> int:
    """
    Age in whole years on ``today``.

    The year difference is reduced by one while the birthday has not yet
    occurred in the current year.

    Examples:
        >>> calculate_age(date(2023, 1, 1), date(2025, 6, 1))
        2
        >>> calculate_age(date(2023, 6, 2), date(2025, 6, 1))
        1
    """
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def derive_attributes(
    date_of_birth: str | None,
    gender: str | None,
    today: date | None = None,
) -> DerivedAttributes:
    """
    Derive passenger type and title.

    Args:
        date_of_birth: DD/MM/YYYY text, may be empty or malformed.
        gender: Gender text, compared case-insensitively against MALE.
        today: Reference date, defaults to the current local date.

    Returns:
        DerivedAttributes. Unparseable dates yield ADULT with an empty title.
    """
    birth_date = parse_record_date(date_of_birth)
    if birth_date is None:
        return UNDERIVABLE

    age = calculate_age(birth_date, today or date.today())
    is_male = (gender or "").strip().upper() == "MALE"

    if age < INFANT_MAX_AGE:
        return DerivedAttributes(
            passenger_type=PassengerType.INFANT,
            title="MSTR" if is_male else "MISS",
        )

    # Children share the adult title rule
    if is_male:
        title = "MR"
    else:
        title = "MRS" if age > MARRIED_TITLE_MIN_AGE else "MS"

    passenger_type = PassengerType.CHILD if age < CHILD_MAX_AGE else PassengerType.ADULT
    return DerivedAttributes(passenger_type=passenger_type, title=title)

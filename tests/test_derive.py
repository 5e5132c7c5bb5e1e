"""Tests for derived passenger attributes."""

from datetime import date

import pytest

from paxmanifest.core.dates import parse_record_date, split_date_parts
from paxmanifest.core.derive import calculate_age, derive_attributes
from paxmanifest.core.schema import PassengerType


class TestRecordDates:
    """Tests for DD/MM/YYYY parsing."""

    def test_parse_valid(self):
        """Valid dates should parse."""
        assert parse_record_date("05/11/1990") == date(1990, 11, 5)

    def test_parse_tolerates_whitespace(self):
        """Surrounding whitespace should be ignored."""
        assert parse_record_date(" 05/11/1990 ") == date(1990, 11, 5)

    @pytest.mark.parametrize("value", ["", None, "abc", "1990-11-05", "05/11", "31/02/2020", "aa/bb/cccc"])
    def test_parse_invalid(self, value):
        """Malformed dates should yield None."""
        assert parse_record_date(value) is None

    def test_split_requires_three_parts(self):
        """Only three-part strings should split."""
        assert split_date_parts("1/2/3") == ("1", "2", "3")
        assert split_date_parts("1/2/3/4") is None


class TestCalculateAge:
    """Tests for calendar age."""

    def test_birthday_passed(self):
        """Age counts full years once the birthday has passed."""
        assert calculate_age(date(2000, 3, 1), date(2025, 3, 1)) == 25

    def test_birthday_not_yet(self):
        """Age is one less before the birthday."""
        assert calculate_age(date(2000, 3, 2), date(2025, 3, 1)) == 24


class TestDeriveAttributes:
    """Tests for type/title derivation."""

    def test_two_year_old_boy_is_child(self):
        """DOB 01/01/2023 evaluated in 2025 is a two-year-old child titled MR."""
        derived = derive_attributes("01/01/2023", "MALE", date(2025, 6, 1))
        assert derived.passenger_type == PassengerType.CHILD
        assert derived.title == "MR"

    def test_exactly_two_is_child(self):
        """Age exactly two on the birthday is CHILD, not INFANT."""
        derived = derive_attributes("15/06/2023", "FEMALE", date(2025, 6, 15))
        assert derived.passenger_type == PassengerType.CHILD
        assert derived.title == "MS"

    def test_day_before_second_birthday_is_infant(self):
        """One day short of two is still an infant."""
        derived = derive_attributes("16/06/2023", "FEMALE", date(2025, 6, 15))
        assert derived.passenger_type == PassengerType.INFANT
        assert derived.title == "MISS"

    def test_infant_boy(self):
        """Male infants are MSTR."""
        derived = derive_attributes("01/01/2025", "male", date(2025, 6, 1))
        assert derived.passenger_type == PassengerType.INFANT
        assert derived.title == "MSTR"

    def test_twelve_is_adult(self):
        """Age twelve is ADULT."""
        derived = derive_attributes("01/01/2013", "FEMALE", date(2025, 6, 1))
        assert derived.passenger_type == PassengerType.ADULT
        assert derived.title == "MS"

    def test_woman_over_thirty_is_mrs(self):
        """Women over thirty get MRS."""
        derived = derive_attributes("01/01/1980", "FEMALE", date(2025, 6, 1))
        assert derived.title == "MRS"

    def test_woman_exactly_thirty_is_ms(self):
        """Thirty is not over thirty."""
        derived = derive_attributes("01/01/1995", "FEMALE", date(2025, 6, 1))
        assert derived.title == "MS"

    def test_missing_gender_uses_non_male_rule(self):
        """Absent gender falls through to the non-male titles."""
        derived = derive_attributes("01/01/1980", None, date(2025, 6, 1))
        assert derived.title == "MRS"

    def test_unparseable_date(self):
        """Unparseable dates default to ADULT with no title."""
        derived = derive_attributes("abc", "MALE")
        assert derived.passenger_type == PassengerType.ADULT
        assert derived.title == ""

    def test_empty_date(self):
        """Empty dates default to ADULT with no title."""
        derived = derive_attributes("", "FEMALE")
        assert derived.passenger_type == PassengerType.ADULT
        assert derived.title == ""

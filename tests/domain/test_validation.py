"""Tests for the shared field rules."""

from datetime import date
from decimal import Decimal

import pytest

from policy_management.domain.validation import (
    check_date_range,
    check_email,
    check_full_name,
    check_identification_number,
    check_insured_amount,
    check_phone,
    is_valid_date_range,
    normalize_email,
    validate_client_fields,
    validate_policy_fields,
    validate_profile_fields,
)


class TestIdentificationNumber:
    def test_accepts_ten_digits(self):
        assert check_identification_number("0123456789") == []

    @pytest.mark.parametrize("value", ["123456789", "12345678901", "12345abcde", ""])
    def test_rejects_other_shapes(self, value):
        assert check_identification_number(value)

    def test_missing_value_message(self):
        assert check_identification_number(None) == ["Identification number is required"]


class TestFullName:
    @pytest.mark.parametrize("value", ["Ana Lopez", "José Núñez", "Zoë Ångström"])
    def test_accepts_letters_and_spaces(self, value):
        assert check_full_name(value) == []

    @pytest.mark.parametrize("value", ["Ana2", "Ana-Lopez", "O'Brien", "   "])
    def test_rejects_other_characters(self, value):
        assert check_full_name(value)

    def test_length_limit(self):
        assert check_full_name("a" * 101) == ["Full name cannot exceed 100 characters"]


class TestEmail:
    @pytest.mark.parametrize("value", ["ana@test.com", "a.b+c@mail.domain.org"])
    def test_accepts_addresses_with_domain(self, value):
        assert check_email(value) == []

    @pytest.mark.parametrize(
        "value",
        [
            "ana",
            "ana@",
            "ana@test",
            "@test.com",
            "a b@test.com",
            ".ana@test.com",
            "ana.@test.com",
            "ana..lopez@test.com",
        ],
    )
    def test_rejects_malformed(self, value):
        assert check_email(value) == ["Email format is not valid"]

    def test_length_limit(self):
        value = "a" * 95 + "@t.com"
        assert "Email cannot exceed 100 characters" in check_email(value)

    def test_normalize_email(self):
        assert normalize_email("  Ana@Test.COM ") == "ana@test.com"


class TestPhone:
    @pytest.mark.parametrize("value", ["+1 555 0000", "(555) 123-4567", "5550000"])
    def test_accepts_digits_and_separators(self, value):
        assert check_phone(value) == []

    @pytest.mark.parametrize("value", ["555-CALL", "++1 555", "1+555"])
    def test_rejects_other_characters(self, value):
        assert check_phone(value)

    def test_length_limit(self):
        assert check_phone("1" * 21) == ["Phone cannot exceed 20 characters"]


class TestInsuredAmount:
    @pytest.mark.parametrize("value", [Decimal("0.01"), 1, 2.5, "1000.00"])
    def test_accepts_positive(self, value):
        assert check_insured_amount(value) == []

    @pytest.mark.parametrize("value", [0, -1, Decimal("-0.01")])
    def test_rejects_non_positive(self, value):
        assert check_insured_amount(value) == ["Insured amount must be greater than zero"]

    def test_rejects_fractional_cents(self):
        assert check_insured_amount(Decimal("1.001")) == [
            "Insured amount can have at most two decimal places"
        ]

    def test_rejects_non_numeric(self):
        assert check_insured_amount("abc") == ["Insured amount must be a number"]

    def test_rejects_missing(self):
        assert check_insured_amount(None) == ["Insured amount is required"]

    def test_largest_amount_exact_as_json_number(self):
        assert check_insured_amount(Decimal("9999999999999.99")) == []

    def test_rejects_amount_beyond_json_precision(self):
        assert check_insured_amount(Decimal("10000000000000")) == [
            "Insured amount is too large"
        ]


class TestDateRange:
    def test_end_after_start(self):
        assert is_valid_date_range(date(2024, 1, 1), date(2024, 1, 2))

    def test_same_day_is_invalid(self):
        assert not is_valid_date_range(date(2024, 1, 1), date(2024, 1, 1))

    def test_end_before_start_is_invalid(self):
        assert not is_valid_date_range(date(2024, 1, 2), date(2024, 1, 1))

    def test_check_reports_message(self):
        assert check_date_range(date(2024, 1, 2), date(2024, 1, 1)) == [
            "End date must be after the start date"
        ]
        assert check_date_range(None, date(2024, 1, 1)) == []


class TestAggregates:
    def test_valid_client_has_no_errors(self):
        assert validate_client_fields("1234567890", " Ana Lopez ", "ana@test.com", "555") == {}

    def test_client_errors_keyed_by_json_field(self):
        errors = validate_client_fields("1", "", "bad", "x")
        assert set(errors) == {"identificationNumber", "fullName", "email", "phone"}

    def test_profile_ignores_blank_fields(self):
        assert validate_profile_fields("  ", None) == {}
        assert set(validate_profile_fields("bad", "")) == {"email"}

    def test_policy_fields(self):
        errors = validate_policy_fields(date(2024, 5, 1), date(2024, 1, 1), 0, None)
        assert errors == {
            "endDate": ["End date must be after the start date"],
            "insuredAmount": ["Insured amount must be greater than zero"],
            "clientId": ["Client is required"],
        }

    def test_policy_fields_required_dates(self):
        errors = validate_policy_fields(None, None, 10, 1)
        assert set(errors) == {"startDate", "endDate"}

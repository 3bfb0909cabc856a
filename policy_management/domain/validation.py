"""Field rules shared by the API schemas and the client-side forms.

Each rule is a pure function returning the list of messages for a value (an
empty list means the value is valid). The aggregate ``validate_*_fields``
helpers return a map keyed by the JSON field name, the same shape the API
returns in a 400 response.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation

from email_validator import EmailNotValidError, validate_email

FIELD_IDENTIFICATION_NUMBER = "identificationNumber"
FIELD_FULL_NAME = "fullName"
FIELD_EMAIL = "email"
FIELD_PHONE = "phone"
FIELD_INSURED_AMOUNT = "insuredAmount"
FIELD_START_DATE = "startDate"
FIELD_END_DATE = "endDate"
FIELD_CLIENT_ID = "clientId"

IDENTIFICATION_NUMBER_LENGTH = 10
FULL_NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20

_IDENTIFICATION_NUMBER_RE = re.compile(r"^[0-9]{10}$")
# ASCII letters plus the Latin-1 letter block (á, é, ñ, ü, ...), no digits.
_FULL_NAME_RE = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ\s]+$")
_PHONE_RE = re.compile(r"^[+]?[0-9\s\-()]+$")

_CENT = Decimal("0.01")
# Amounts travel as JSON numbers (IEEE doubles), exact to the cent below 1e13.
_MAX_AMOUNT = Decimal("1e13")

FieldErrors = dict[str, list[str]]


def check_identification_number(value: str | None) -> list[str]:
    if not value:
        return ["Identification number is required"]
    if not _IDENTIFICATION_NUMBER_RE.fullmatch(value):
        return ["Identification number must be exactly 10 digits"]
    return []


def check_full_name(value: str | None) -> list[str]:
    if not value or not value.strip():
        return ["Full name is required"]
    errors = []
    if len(value) > FULL_NAME_MAX_LENGTH:
        errors.append(f"Full name cannot exceed {FULL_NAME_MAX_LENGTH} characters")
    if not _FULL_NAME_RE.fullmatch(value):
        errors.append("Full name must contain only letters and spaces")
    return errors


def check_email(value: str | None) -> list[str]:
    if not value:
        return ["Email is required"]
    errors = []
    if len(value) > EMAIL_MAX_LENGTH:
        errors.append(f"Email cannot exceed {EMAIL_MAX_LENGTH} characters")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        errors.append("Email format is not valid")
    return errors


def check_phone(value: str | None) -> list[str]:
    if not value:
        return ["Phone is required"]
    errors = []
    if len(value) > PHONE_MAX_LENGTH:
        errors.append(f"Phone cannot exceed {PHONE_MAX_LENGTH} characters")
    if not _PHONE_RE.fullmatch(value):
        errors.append("Phone format is not valid")
    return errors


def check_insured_amount(value: Decimal | float | int | str | None) -> list[str]:
    if value is None or value == "":
        return ["Insured amount is required"]
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return ["Insured amount must be a number"]
    if not amount.is_finite() or amount <= 0:
        return ["Insured amount must be greater than zero"]
    if amount >= _MAX_AMOUNT:
        return ["Insured amount is too large"]
    if amount != amount.quantize(_CENT):
        return ["Insured amount can have at most two decimal places"]
    return []


def check_date_range(start: date | None, end: date | None) -> list[str]:
    if start is None or end is None:
        return []
    if not is_valid_date_range(start, end):
        return ["End date must be after the start date"]
    return []


def is_valid_date_range(start: date, end: date) -> bool:
    return end > start


def _collect(checks: dict[str, list[str]]) -> FieldErrors:
    return {field: messages for field, messages in checks.items() if messages}


def validate_client_fields(
    identification_number: str | None,
    full_name: str | None,
    email: str | None,
    phone: str | None,
) -> FieldErrors:
    """Validate a full client record. Values are trimmed before checking."""
    return _collect(
        {
            FIELD_IDENTIFICATION_NUMBER: check_identification_number(
                _strip(identification_number)
            ),
            FIELD_FULL_NAME: check_full_name(_strip(full_name)),
            FIELD_EMAIL: check_email(_strip(email)),
            FIELD_PHONE: check_phone(_strip(phone)),
        }
    )


def validate_profile_fields(email: str | None, phone: str | None) -> FieldErrors:
    """Validate a narrow profile update; blank fields are simply not applied."""
    checks: dict[str, list[str]] = {}
    if email and email.strip():
        checks[FIELD_EMAIL] = check_email(email.strip())
    if phone and phone.strip():
        checks[FIELD_PHONE] = check_phone(phone.strip())
    return _collect(checks)


def validate_policy_fields(
    start_date: date | None,
    end_date: date | None,
    insured_amount: Decimal | float | int | str | None,
    client_id: int | None,
) -> FieldErrors:
    """Validate the fields of a new policy."""
    return _collect(
        {
            FIELD_START_DATE: [] if start_date else ["Start date is required"],
            FIELD_END_DATE: (
                check_date_range(start_date, end_date)
                if end_date
                else ["End date is required"]
            ),
            FIELD_INSURED_AMOUNT: check_insured_amount(insured_amount),
            FIELD_CLIENT_ID: (
                [] if client_id and client_id > 0 else ["Client is required"]
            ),
        }
    )


def normalize_email(value: str) -> str:
    """Canonical stored form of an email for create/update."""
    return value.strip().lower()


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value

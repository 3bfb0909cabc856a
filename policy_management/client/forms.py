"""Form binding for the client-side store.

Forms are checked with the same rule functions the API schemas use, so a
value the form accepts is a value the server accepts.
"""

from policy_management.client.state import (
    CreateClient,
    CreatePolicy,
    UpdateClient,
    UpdatePolicy,
    UpdateProfile,
)
from policy_management.domain.validation import (
    FIELD_END_DATE,
    FIELD_INSURED_AMOUNT,
    FieldErrors,
    check_date_range,
    check_insured_amount,
    validate_client_fields,
    validate_policy_fields,
    validate_profile_fields,
)


def validate_client_form(form: CreateClient | UpdateClient) -> FieldErrors:
    return validate_client_fields(
        form.identification_number, form.full_name, form.email, form.phone
    )


def validate_profile_form(form: UpdateProfile) -> FieldErrors:
    return validate_profile_fields(form.email, form.phone)


def validate_policy_form(form: CreatePolicy) -> FieldErrors:
    return validate_policy_fields(
        form.start_date, form.end_date, form.insured_amount, form.client_id
    )


def validate_policy_update_form(form: UpdatePolicy) -> FieldErrors:
    """Only the supplied fields are checked; status needs no rule."""
    errors: FieldErrors = {}
    amount = form.changes.get("insured_amount")
    if amount is not None:
        if messages := check_insured_amount(amount):
            errors[FIELD_INSURED_AMOUNT] = messages
    start, end = form.changes.get("start_date"), form.changes.get("end_date")
    if start is not None and end is not None:
        if messages := check_date_range(start, end):
            errors[FIELD_END_DATE] = messages
    return errors

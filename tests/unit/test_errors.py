import pytest

from usermanagement.core.errors import (
    ConflictError,
    FieldError,
    InternalError,
    InvalidStatusError,
    UserNotFoundError,
    ValidationFailedError,
    usermanagementError,
)


@pytest.mark.unit
def test_conflict_messages():
    assert str(ConflictError("userName", "johndoe")) == "Username 'johndoe' already exists"
    assert str(ConflictError("email", "a@x.com")) == "Email 'a@x.com' already exists"
    assert str(ConflictError("email")) == "Email already exists"


@pytest.mark.unit
def test_invalid_status_is_a_validation_failure():
    err = InvalidStatusError("X")
    assert isinstance(err, ValidationFailedError)
    assert err.fields == [
        FieldError("userStatus", "one_of", "Invalid user status: 'X'. Must be one of 'A', 'I', 'T'.")
    ]


@pytest.mark.unit
def test_validation_failed_summarises_fields():
    err = ValidationFailedError([FieldError("userName", "min_length", "m"), FieldError("email", "email", "m")])
    assert str(err) == "Validation failed (userName:min_length, email:email)"
    assert err.fields[0].as_dict() == {"field": "userName", "rule": "min_length", "message": "m"}


@pytest.mark.unit
def test_not_found_and_internal():
    assert str(UserNotFoundError(3)) == "User with id 3 not found"
    assert str(InternalError()) == "An unexpected error occurred on the server."
    for err in (UserNotFoundError(3), InternalError(), ConflictError("email")):
        assert isinstance(err, usermanagementError)

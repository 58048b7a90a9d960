import pytest

from app.utils.validation import FieldError, validate_email, validate_login, validate_signup


@pytest.mark.parametrize("email", ["jade@example.com", "jade.walker+amora@mail.co.id"])
def test_valid_emails(email):
    assert validate_email(email)


@pytest.mark.parametrize("email", ["jade", "jade@", "@example.com", "jade@example"])
def test_invalid_emails(email):
    assert not validate_email(email)


def test_login_accepts_good_input():
    assert validate_login("jade@example.com", "secret1") is None


@pytest.mark.parametrize(
    "email,password,expected",
    [
        ("", "secret1", FieldError("email", "Please enter your email")),
        ("jade", "secret1", FieldError("email", "Please enter a valid email")),
        ("jade@example.com", "", FieldError("password", "Please enter your password")),
        ("jade@example.com", "12345", FieldError("password", "Password must be at least 6 characters")),
    ],
)
def test_login_errors(email, password, expected):
    assert validate_login(email, password) == expected


def test_signup_accepts_good_input():
    assert validate_signup("Jade Walker", "jade@example.com", "secret1", "secret1") is None


@pytest.mark.parametrize(
    "name,email,password,confirm,expected",
    [
        ("", "jade@example.com", "secret1", "secret1", FieldError("full_name", "Please enter your full name")),
        ("Jo", "jade@example.com", "secret1", "secret1", FieldError("full_name", "Name must be at least 3 characters")),
        ("Jade", "", "secret1", "secret1", FieldError("email", "Please enter your email")),
        ("Jade", "jade@example.com", "", "", FieldError("password", "Please enter a password")),
        ("Jade", "jade@example.com", "secret1", "", FieldError("confirm_password", "Please confirm your password")),
        ("Jade", "jade@example.com", "secret1", "secret2", FieldError("confirm_password", "Passwords do not match")),
    ],
)
def test_signup_errors(name, email, password, confirm, expected):
    assert validate_signup(name, email, password, confirm) == expected


def test_first_failing_field_wins():
    error = validate_signup("", "not-an-email", "1", "2")

    assert error.field == "full_name"

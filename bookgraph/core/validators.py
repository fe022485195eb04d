"""
Field validation for Book and Author commands.

Business rules checked before any store mutation. Each check raises
ValidationError naming the field and the violated rule. Update commands
pass only the fields they were given; None means "not supplied".

Dependencies: bookgraph.core.exceptions
System role: Command input validation
"""

from datetime import date
from decimal import Decimal, InvalidOperation

from bookgraph.core.exceptions import ValidationError

TITLE_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 200
EMAIL_MAX_LENGTH = 255


def validate_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationError("Title is required", field="title", rule="required")
    if len(title.strip()) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Title cannot exceed {TITLE_MAX_LENGTH} characters",
            field="title",
            rule="max_length",
            details={"max_length": TITLE_MAX_LENGTH},
        )


def validate_description(description: str) -> None:
    if len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
            rule="max_length",
            details={"max_length": DESCRIPTION_MAX_LENGTH},
        )


def validate_price(price: Decimal) -> Decimal:
    """
    Validate and coerce a price.

    Args:
        price: Decimal, int, float or numeric string

    Returns:
        Decimal: The price as a Decimal

    Raises:
        ValidationError: If the price is not a finite non-negative number
    """
    try:
        value = Decimal(str(price))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError("Price must be a number", field="price", rule="numeric") from e
    if not value.is_finite():
        raise ValidationError("Price must be a number", field="price", rule="numeric")
    if value < 0:
        raise ValidationError("Price cannot be negative", field="price", rule="non_negative")
    return value


def validate_book_fields(
    title: str | None = None,
    description: str | None = None,
    price: Decimal | None = None,
) -> None:
    """
    Validate the supplied Book fields.

    Args:
        title: New title, if supplied
        description: New description, if supplied
        price: New price, if supplied

    Raises:
        ValidationError: On the first field that breaks a rule
    """
    if title is not None:
        validate_title(title)
    if description is not None:
        validate_description(description)
    if price is not None:
        validate_price(price)


def validate_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("Name is required", field="name", rule="required")
    stripped = name.strip()
    if len(stripped) < NAME_MIN_LENGTH:
        raise ValidationError(
            f"Name must be at least {NAME_MIN_LENGTH} characters long",
            field="name",
            rule="min_length",
            details={"min_length": NAME_MIN_LENGTH},
        )
    if len(stripped) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name cannot exceed {NAME_MAX_LENGTH} characters",
            field="name",
            rule="max_length",
            details={"max_length": NAME_MAX_LENGTH},
        )


def validate_email(email: str) -> None:
    if not email or not email.strip():
        raise ValidationError("Email is required", field="email", rule="required")
    if "@" not in email:
        raise ValidationError("Invalid email format", field="email", rule="format")
    if len(email.strip()) > EMAIL_MAX_LENGTH:
        raise ValidationError(
            f"Email cannot exceed {EMAIL_MAX_LENGTH} characters",
            field="email",
            rule="max_length",
            details={"max_length": EMAIL_MAX_LENGTH},
        )


def validate_date_of_birth(date_of_birth: date, today: date) -> None:
    if date_of_birth > today:
        raise ValidationError(
            "Date of birth cannot be in the future",
            field="date_of_birth",
            rule="not_in_future",
        )


def validate_author_fields(
    today: date,
    name: str | None = None,
    email: str | None = None,
    date_of_birth: date | None = None,
) -> None:
    """
    Validate the supplied Author fields.

    Args:
        today: Reference date for the date-of-birth check
        name: New name, if supplied
        email: New email, if supplied
        date_of_birth: New date of birth, if supplied

    Raises:
        ValidationError: On the first field that breaks a rule
    """
    if name is not None:
        validate_name(name)
    if email is not None:
        validate_email(email)
    if date_of_birth is not None:
        validate_date_of_birth(date_of_birth, today)

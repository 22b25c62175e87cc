def validate_required(value: str, field: str) -> str:
    """
    validate_required strips surrounding whitespace and rejects empty values.

    Args:
        value (str): The value to validate
        field (str): The field name used in the error message

    Returns:
        str: The stripped value

    Raises:
        ValueError: If the value is empty or only whitespace
    """
    value = value.strip()
    if not value:
        raise ValueError(f"{field} is required")
    return value


def validate_password(password: str) -> str:
    """
    validate_password only rejects empty passwords, the value is kept as given.

    Args:
        password (str): The password to validate

    Returns:
        str: The unchanged password

    Raises:
        ValueError: If the password is empty
    """
    if not password:
        raise ValueError("Password is required")
    return password


def validate_quantity(quantity: int) -> int:
    """
    validate_quantity ensures the quantity is a positive integer.

    Args:
        quantity (int): The quantity to validate

    Returns:
        int: The validated quantity

    Raises:
        ValueError: If the quantity is not a positive integer
    """
    # bool is an int subclass
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValueError("Quantity must be an integer")
    if quantity < 1:
        raise ValueError("Quantity must be at least 1")
    return quantity

"""Field error messages returned to API clients."""


def label(field: str) -> str:
    return field.replace("_", " ")


def required_message(field: str) -> str:
    return f"The {label(field)} field is required."


def string_message(field: str) -> str:
    return f"The {label(field)} must be a string."


def max_length_message(field: str, limit) -> str:
    return f"The {label(field)} must not be greater than {limit} characters."


def number_message(field: str) -> str:
    return f"The {label(field)} must be a number."


def integer_message(field: str) -> str:
    return f"The {label(field)} must be an integer."


def min_value_message(field: str, limit) -> str:
    return f"The {label(field)} must be at least {limit}."


def max_value_message(field: str, limit) -> str:
    return f"The {label(field)} must not be greater than {limit}."


def taken_message(field: str) -> str:
    return f"The {label(field)} has already been taken."


def decimal_places_message(field: str, places) -> str:
    return f"The {label(field)} must not have more than {places} decimal places."

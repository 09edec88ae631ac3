class EnvNotFoundError(Exception):
    """Raised when a required environment variable is not found."""

    def __init__(self, env_var_name: str):
        super().__init__(f"Environment variable '{env_var_name}' not found.")


class MissingDBNameError(Exception):
    """Raised when an operation needs a database name but none is configured."""

    def __init__(self):
        super().__init__("Database name is not set.")


class SessionNotSetError(Exception):
    """Raised when the database session is not set."""

    def __init__(self):
        super().__init__("Database session is not set.")


class DatabaseUnavailableError(Exception):
    """Raised when the database cannot be reached."""

    def __init__(self, db_url: str):
        super().__init__(f"Cannot connect to database at '{db_url}'.")


class EmptyValueError(ValueError):
    """Raised when a required text field is empty."""

    def __init__(self, field_name: str):
        super().__init__(f"The field '{field_name}' must not be empty.")

class RecordValidationException(ValueError):
    """Raised when a record payload fails validation."""
    pass

class ConfigurationException(ValueError):
    """Raised when the environment configuration is invalid."""
    pass

def handle_error(e: Exception) -> dict:
    """
    Converts an exception into the result structure printed by the CLI,
    so one bad value does not end the session.
    """
    error_type = type(e).__name__
    return {
        "ok": False,
        "error_type": error_type,
        "message": f"Value rejected: {error_type}: {e}",
        "result": None,
    }

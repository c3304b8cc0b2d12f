# src/igservices/errors.py


class FetchError(ValueError):
    """Raised when a reference cannot be resolved because input or package content is broken.

    Distinct from "not found", which is reported as None.
    """

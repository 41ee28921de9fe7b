class AppStatusCode:
    """Internal status codes carried in the ``status_code`` field of every
    ``JsonOutResult`` envelope, next to the HTTP status."""

    DATA_RETRIEVED_SUCCESSFULLY = "100"

    OPERATION_FAILED = "200"
    INVALID_INPUT = "202"
    RECORD_NOT_FOUND = "205"
    DEPENDENCY_FAILURE = "206"

    INSUFFICIENT_INVENTORY = "300"

    AUTHENTICATION_TOKEN_INVALID = "400"
    AUTHENTICATION_TOKEN_EXPIRED = "401"
    AUTHENTICATION_CREDENTIALS_INVALID = "402"
    AUTHENTICATION_USER_INVALID = "403"
    AUTHENTICATION_USER_INACTIVE = "404"

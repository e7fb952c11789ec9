class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"
    UPDATED_SUCCESSFULLY = "102"
    DELETED_SUCCESSFULLY = "103"

    # Authentication
    AUTHENTICATION_CREDENTIALS_INVALID = "200"
    AUTHENTICATION_TOKEN_INVALID = "201"
    AUTHENTICATION_TOKEN_EXPIRED = "202"
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "203"
    UNAUTHORIZED_ACTION = "204"

    # Input
    INVALID_INPUT = "300"
    REQUIRED_VALIDATION_ERROR = "301"

    # Operations
    OPERATION_ERROR = "400"
    OPERATION_FAILED = "401"
    RECORD_NOT_FOUND = "402"
    STORAGE_ERROR = "403"

"""Custom exceptions for the upload gateway.

This module provides a hierarchy of exceptions with helpful error messages
so that client mistakes and storage backend failures can be told apart.
"""


class UploadGatewayError(Exception):
    """Base exception for all upload gateway errors.

    All gateway exceptions inherit from this class, making it easy
    to catch every error raised by the service in one place.
    """

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class S3ConnectionError(UploadGatewayError):
    """Raised when an S3 client cannot be created or reached.

    This exception wraps underlying connection errors with helpful
    context about what might be wrong.
    """

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
    ):
        """Initialize the connection error.

        Args:
            message: Custom error message (optional)
            original_error: The original exception that caused this error
            endpoint: The S3 endpoint URL being connected to
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            hint = None
        elif original_error:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Failed to connect to S3"
            hint = "Check your AWS credentials and network connection."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        error_str = str(error)

        if "Could not connect" in error_str or "Connection refused" in error_str:
            return (
                f"Could not connect to S3 at {endpoint or 'AWS'}",
                "Check your network connection and the AWS_URL setting.",
            )

        if "InvalidAccessKeyId" in error_str:
            return (
                "Invalid AWS access key ID",
                "Check your AWS_ACCESS_KEY_ID environment variable.",
            )

        if "SignatureDoesNotMatch" in error_str:
            return (
                "AWS signature mismatch",
                "Check your AWS_SECRET_ACCESS_KEY environment variable.",
            )

        if "ExpiredToken" in error_str:
            return (
                "AWS credentials have expired",
                "Refresh your AWS credentials or generate new access keys.",
            )

        return (f"S3 connection error: {error}", None)


class S3BucketNotFoundError(UploadGatewayError):
    """Raised when the configured bucket doesn't exist."""

    def __init__(self, bucket_name: str):
        """Initialize the bucket not found error.

        Args:
            bucket_name: The bucket that was not found
        """
        self.bucket_name = bucket_name
        super().__init__(
            f"Bucket '{bucket_name}' not found",
            f"Create the bucket with: aws s3 mb s3://{bucket_name}\n"
            "Or check the AWS_BUCKET_NAME environment variable.",
        )


class S3OperationError(UploadGatewayError):
    """Raised when a storage backend call fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the operation error.

        Args:
            message: The error message
            operation: The S3 operation that failed (e.g., 'upload_part')
            key: The S3 key involved in the operation
            original_error: The original exception
        """
        self.operation = operation
        self.key = key
        self.original_error = original_error

        hint = None
        if "NoSuchUpload" in message:
            hint = "The upload ID is unknown, already completed or aborted."
        elif "InvalidPartOrder" in message:
            hint = "List parts in ascending partNumber order."
        elif "InvalidPart" in message:
            hint = "Check that every part was uploaded and its eTag matches."
        elif "NoSuchBucket" in message:
            hint = "The specified bucket does not exist."
        elif "AccessDenied" in message:
            hint = "Check your IAM permissions for this operation."

        super().__init__(message, hint)


class S3ValidationError(UploadGatewayError):
    """Raised when a request is missing or has invalid parameters."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
    ):
        """Initialize the validation error.

        Args:
            message: The error message
            field: The parameter that failed validation
            value: The invalid value (don't include sensitive data!)
        """
        self.field = field
        self.value = value

        hint = None
        if field:
            hint = f"Check the value for parameter '{field}'."

        super().__init__(message, hint)


class S3ConfigurationError(UploadGatewayError):
    """Raised when the gateway configuration is invalid."""

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing configuration fields
        """
        self.missing_fields = missing_fields or []

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = "Set these as environment variables or in your .env file."
        else:
            hint = "Check your upload gateway configuration."

        super().__init__(message or "Invalid upload gateway configuration", hint)

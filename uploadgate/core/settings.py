"""Settings for the upload gateway, loaded from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from uploadgate.core.exceptions import S3ConfigurationError


class GatewaySettings(BaseSettings):
    """Upload gateway configuration.

    Values are read from environment variables (case-insensitive) or an
    optional ``.env`` file. Unknown variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # AWS settings
    aws_region: str = "us-east-1"
    aws_bucket_name: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_url: str | None = Field(
        default=None, description="Custom S3 endpoint, e.g. LocalStack"
    )
    aws_retry_attempts: int = 3

    # Upload settings
    upload_prefix: str = "uploads/"
    presign_expiry_seconds: int = Field(default=15 * 60, gt=0)
    strict_validation: bool = True
    expose_backend_errors: bool = True

    # Server settings
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"

    def require_bucket(self) -> str:
        """Return the bucket name or raise if it is not configured."""
        if not self.aws_bucket_name:
            raise S3ConfigurationError(missing_fields=["AWS_BUCKET_NAME"])
        return self.aws_bucket_name

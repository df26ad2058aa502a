"""Upload gateway CLI tool."""

import logging
import sys

import click
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from uploadgate.core.client import S3ClientManager
from uploadgate.core.exceptions import (
    S3ConfigurationError,
    S3OperationError,
    UploadGatewayError,
)
from uploadgate.core.settings import GatewaySettings
from uploadgate.storage.uploads import PresignedUploadService, UploadConfig


def _load_settings(**overrides) -> GatewaySettings:
    """Load settings from the environment with command line overrides applied.

    Overrides go through the constructor so they are validated like env values.
    """
    updates = {k: v for k, v in overrides.items() if v is not None}
    try:
        return GatewaySettings(**updates)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        _fail(S3ConfigurationError(f"Invalid configuration: {', '.join(fields)}"))


def _fail(error: UploadGatewayError) -> None:
    click.echo(f"❌ {error.message}", err=True)
    if error.hint:
        click.echo(f"   Hint: {error.hint}", err=True)
    sys.exit(1)


@click.group()
def cli():
    """Upload gateway CLI - presigned S3 uploads."""
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default: HOST or 0.0.0.0)")
@click.option(
    "--port",
    default=None,
    type=click.IntRange(1, 65535),
    help="Port to listen on (default: PORT or 8080)",
)
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
def serve(host, port, log_level):
    """Run the upload gateway HTTP server."""
    import uvicorn

    from uploadgate.fastapi.app import create_app

    settings = _load_settings(host=host, port=port, log_level=log_level)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = create_app(settings)
    except UploadGatewayError as e:
        _fail(e)

    click.echo(f"Upload gateway listening on {settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.argument("filename")
@click.option(
    "--expires", default=None, type=click.IntRange(min=1), help="URL lifetime in seconds"
)
def presign(filename, expires):
    """Print a presigned PUT URL for FILENAME."""
    settings = _load_settings(presign_expiry_seconds=expires)
    manager = S3ClientManager(settings)

    try:
        service = PresignedUploadService(
            settings.require_bucket(),
            UploadConfig(
                upload_prefix=settings.upload_prefix,
                expiration_seconds=settings.presign_expiry_seconds,
            ),
        )
        client = manager.get_sync_client()
        url = client.generate_presigned_url(
            ClientMethod="put_object",
            Params={"Bucket": service.bucket_name, "Key": service.build_key(filename)},
            ExpiresIn=service.config.expiration_seconds,
            HttpMethod="PUT",
        )
    except UploadGatewayError as e:
        _fail(e)
    except (ClientError, BotoCoreError) as e:
        _fail(S3OperationError(str(e), operation="put_object", key=filename, original_error=e))
    finally:
        manager.close()

    click.echo(url)


@cli.command()
def check():
    """Check that the configured bucket is reachable."""
    settings = _load_settings()
    manager = S3ClientManager(settings)

    try:
        manager.check_bucket()
    except UploadGatewayError as e:
        _fail(e)
    finally:
        manager.close()

    click.echo(f"✅ Bucket '{settings.aws_bucket_name}' is reachable")


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

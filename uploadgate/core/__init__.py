"""Core components: settings, exceptions and the S3 client manager."""

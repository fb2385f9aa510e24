"""Read-only report API over scan results."""

from strict_migrate.web.app import create_app

__all__ = ["create_app"]

"""Shared polyfactory setup and value generators for the model factories."""

from uuid import uuid7

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.app.models import utc_now

__all__ = ["BaseFactory", "generate_uuid7", "unique_suffix", "unique_email", "utc_now"]


def generate_uuid7():
    return uuid7()


def unique_suffix() -> str:
    """Ten hex chars of a fresh uuid7, enough to keep unique columns apart."""
    return uuid7().hex[-10:]


def unique_email(prefix: str) -> str:
    return f"{prefix}_{unique_suffix()}@example.com"


class BaseFactory(SQLAlchemyFactory):
    # Profile refs and account bindings are passed explicitly by each test
    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False

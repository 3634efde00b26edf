"""Declarative Base shared by the user and trip tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass

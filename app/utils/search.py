"""Shared SQL predicates for case-insensitive substring search."""

from sqlalchemy import ColumnElement, String, func, or_


def contains_ignore_case(column, term: str) -> ColumnElement[bool]:
    """Match rows whose column contains ``term`` anywhere, ignoring case.

    Both sides are lowercased; LIKE wildcards in ``term`` are escaped so
    they match literally.
    """
    return func.lower(column, type_=String).contains(term.lower(), autoescape=True)


def full_name_matches(model, term: str) -> ColumnElement[bool]:
    """Match on first name, last name, or "first last" independently.

    A term spanning the word boundary (e.g. "n D" for "John Doe") can only
    match through the concatenated form.
    """
    return or_(
        contains_ignore_case(model.first_name, term),
        contains_ignore_case(model.last_name, term),
        contains_ignore_case(model.full_name, term),
    )

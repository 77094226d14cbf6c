"""Parameter objects for the CRUD query builder."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class SelectParams:
    """SELECT request.

    ``limit`` of 0 or None applies the default row cap, a negative value
    disables LIMIT, and larger values are clamped to the cap.
    """

    table: str
    columns: Sequence[str] | None = None
    where: dict[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    desc: bool = False
    limit: int | None = None
    offset: int = 0


@dataclass
class InsertParams:
    """INSERT request."""

    table: str
    values: dict[str, Any]


@dataclass
class UpdateParams:
    """UPDATE request. Both ``set`` and ``where`` must be non-empty."""

    table: str
    set: dict[str, Any]
    where: dict[str, Any]


@dataclass
class DeleteParams:
    """DELETE request. ``where`` must be non-empty."""

    table: str
    where: dict[str, Any]

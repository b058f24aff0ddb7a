from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account (admin, teacher or staff).

    Note: plain data object; no database access in here.
    """

    user_id: int
    email: str
    password_hash: str
    role: Role
    name: str
    teacher_id: Optional[int] = None

# website_users/services/user_repository.py
import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from sqlalchemy.orm import Session

from website_users.core.config import settings
from website_users.core.exceptions import InvalidArgument, NotFound
from website_users.models import WebsiteUser

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "id": WebsiteUser.id,
    "name": WebsiteUser.name,
    "email": WebsiteUser.email,
}

MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


@dataclass
class Page:
    """One slice of the users collection plus the numbers needed to walk it."""

    content: list[WebsiteUser] = field(default_factory=list)
    number: int = 0
    size: int = 0
    total_elements: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    def __iter__(self) -> Iterator[WebsiteUser]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


def parse_sort(sort: Iterable[str] | None):
    """Turn ``["name,desc", "email"]`` into ORDER BY clauses.

    Direction defaults to ascending. ``id`` is always appended last so that
    rows with equal sort keys keep a stable position across pages.
    """
    clauses = []
    seen = set()
    for spec in sort or []:
        parts = [p.strip() for p in spec.split(",")]
        prop = parts[0]
        if not prop:
            raise InvalidArgument(f"Empty sort property in {spec!r}")
        if len(parts) > 2:
            raise InvalidArgument(f"Sort must be 'property[,asc|desc]', got {spec!r}")
        column = SORTABLE_COLUMNS.get(prop)
        if column is None:
            raise InvalidArgument(f"Cannot sort by unknown property {prop!r}")

        direction = parts[1].lower() if len(parts) == 2 and parts[1] else "asc"
        if direction not in ("asc", "desc"):
            raise InvalidArgument(f"Unknown sort direction {parts[1]!r}")

        clauses.append(column.desc() if direction == "desc" else column.asc())
        seen.add(prop)

    if "id" not in seen:
        clauses.append(WebsiteUser.id.asc())
    return clauses


class UserRepository:
    """CRUD, paging and sorting over ``WebsiteUser`` rows.

    Wraps a single SQLAlchemy session; every write is committed before the
    method returns. Errors are raised as ``NotFound`` / ``InvalidArgument``
    and left for the caller to translate.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get(self, user_id: int) -> WebsiteUser | None:
        # ids beyond a signed 64-bit column can never be stored
        if not MIN_ID <= user_id <= MAX_ID:
            return None
        return self.db.get(WebsiteUser, user_id)

    def find_all(self, page: int = 0, size: int | None = None, sort: Iterable[str] | None = None) -> Page:
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        if page < 0:
            raise InvalidArgument(f"Page index must not be negative, got {page}")
        if size <= 0:
            raise InvalidArgument(f"Page size must be positive, got {size}")
        size = min(size, settings.MAX_PAGE_SIZE)

        order_by = parse_sort(sort)
        total = self.count()
        offset = page * size
        if offset >= total:
            return Page(content=[], number=page, size=size, total_elements=total)

        rows = (
            self.db.query(WebsiteUser)
            .order_by(*order_by)
            .offset(offset)
            .limit(size)
            .all()
        )
        return Page(content=rows, number=page, size=size, total_elements=total)

    def find_by_id(self, user_id: int) -> WebsiteUser:
        user = self._get(user_id)
        if user is None:
            logger.debug("WebsiteUser %s not found", user_id)
            raise NotFound("WebsiteUser", user_id)
        return user

    def exists_by_id(self, user_id: int) -> bool:
        return self._get(user_id) is not None

    def count(self) -> int:
        return self.db.query(WebsiteUser).count()

    def save(self, user: WebsiteUser) -> WebsiteUser:
        saved, _ = self.upsert(user)
        return saved

    def upsert(self, user: WebsiteUser) -> tuple[WebsiteUser, bool]:
        """Persist ``user`` and report whether a new row was inserted."""
        if user.id is None:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            logger.info("Created WebsiteUser %s", user.id)
            return user, True

        existing = self._get(user.id)
        if existing is None:
            # Unknown id: insert a fresh row, the storage layer picks the id
            created = WebsiteUser(name=user.name, email=user.email)
            self.db.add(created)
            self.db.commit()
            self.db.refresh(created)
            logger.info("WebsiteUser %s did not exist, created %s", user.id, created.id)
            return created, True

        if existing is not user:
            existing.name = user.name
            existing.email = user.email
        self.db.commit()
        self.db.refresh(existing)
        logger.info("Updated WebsiteUser %s", existing.id)
        return existing, False

    def delete_by_id(self, user_id: int) -> None:
        user = self.find_by_id(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted WebsiteUser %s", user_id)

    def find_by_name(self, name: str) -> list[WebsiteUser]:
        return (
            self.db.query(WebsiteUser)
            .filter(WebsiteUser.name == name)
            .order_by(WebsiteUser.id.asc())
            .all()
        )

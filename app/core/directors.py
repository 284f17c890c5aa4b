"""Board roster extraction from a business record.

Business records carry directors in numbered slots (director_1, d1_title, ...).
They are read into an ordered, bounded list instead of being addressed by
building column names on the fly at every call site.
"""

from typing import Any

from pydantic import BaseModel, Field

from app.core.placeholders import has_value
from app.core.schemas_section_context import DirectorRecord

MAX_DIRECTOR_SLOTS = 10

# Slot column names per director position, in one place
DIRECTOR_SLOT_COLUMNS: tuple[dict[str, str], ...] = tuple(
    {
        "name": f"director_{n}",
        "title": f"d{n}_title",
        "nationality": f"d{n}_nationality",
        "date_of_birth": f"d{n}_dob",
        "shareholding": f"d{n}_shares_in_the_co",
        "other_directorships": f"d{n}_other_directorships",
    }
    for n in range(1, MAX_DIRECTOR_SLOTS + 1)
)


class BoardRoster(BaseModel):
    """Directors read from a business record, checked against the declared total."""

    declared_total: int | None = None
    directors: list[DirectorRecord] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        if self.declared_total is None:
            return True
        return len(self.directors) >= self.declared_total


def _declared_total(issuer: dict[str, Any]) -> int | None:
    raw = issuer.get("how_many_directors_total")
    if not has_value(raw):
        return None
    try:
        total = int(str(raw).strip())
    except ValueError:
        return None
    return max(0, min(total, MAX_DIRECTOR_SLOTS))


def _text(value: Any) -> str | None:
    return str(value).strip() if has_value(value) else None


def extract_board(issuer: dict[str, Any] | None) -> BoardRoster:
    """Read up to MAX_DIRECTOR_SLOTS named directors from the business record."""
    if not issuer:
        return BoardRoster()

    directors: list[DirectorRecord] = []
    for position, columns in enumerate(DIRECTOR_SLOT_COLUMNS, start=1):
        name = _text(issuer.get(columns["name"]))
        if not name:
            continue
        directors.append(
            DirectorRecord(
                position=position,
                name=name,
                title=_text(issuer.get(columns["title"])),
                nationality=_text(issuer.get(columns["nationality"])),
                date_of_birth=_text(issuer.get(columns["date_of_birth"])),
                shareholding=_text(issuer.get(columns["shareholding"])),
                other_directorships=_text(issuer.get(columns["other_directorships"])),
            )
        )

    return BoardRoster(declared_total=_declared_total(issuer), directors=directors)


def format_director(director: DirectorRecord) -> str:
    """One-line summary of a director for prompts."""
    details = [d for d in (director.title, director.nationality) if d]
    if director.shareholding:
        details.append(f"shares: {director.shareholding}")
    suffix = f" ({', '.join(details)})" if details else ""
    return f"Director {director.position}: {director.name}{suffix}"

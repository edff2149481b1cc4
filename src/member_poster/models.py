"""Member records and per-request poster jobs."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

ImageSource = Union[str, Path, bytes]

MEMBER_FIELDS = ("name", "email", "phone", "designation", "photo")


@dataclass(frozen=True)
class MemberProfile:
    """The subject of a poster. Text fields are rendered verbatim."""

    name: str
    designation: str
    phone: str
    photo: ImageSource = field(repr=False)


@dataclass(frozen=True)
class PosterJob:
    """One poster request: executed once, then discarded."""

    template_source: ImageSource = field(repr=False)
    member: MemberProfile
    logo_source: ImageSource = field(repr=False)
    output_target: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_target", Path(self.output_target))


@dataclass(frozen=True)
class Member:
    """A row of the member register, keyed by (email, designation)."""

    name: str
    email: str
    phone: str
    designation: str
    photo: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.email.strip().lower(), self.designation.strip())

    @property
    def designations(self) -> tuple[str, ...]:
        """Split a comma-joined designation into trimmed labels."""
        return tuple(part.strip() for part in self.designation.split(",") if part.strip())

    def has_designation(self, designation: str) -> bool:
        wanted = designation.strip().lower()
        return any(d.lower() == wanted for d in self.designations)

    def to_profile(self) -> MemberProfile:
        return MemberProfile(
            name=self.name,
            designation=self.designation,
            phone=self.phone,
            photo=self.photo,
        )

    def to_row(self) -> list[str]:
        return [getattr(self, name) for name in MEMBER_FIELDS]

    @classmethod
    def from_row(cls, values: dict[str, object]) -> "Member":
        """Build a member from a header-keyed row; blank cells become ''."""
        cleaned = {
            name: "" if values.get(name) is None else str(values.get(name)).strip()
            for name in MEMBER_FIELDS
        }
        return cls(**cleaned)


def slugify(value: str, fallback: str = "member") -> str:
    """Lower-case, hyphen-separated file-name fragment."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or fallback

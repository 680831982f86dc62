from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from src.scraper.domain.types import DfSubType, DfType


@dataclass(frozen=True)
class NamedUrl:
    name: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class NamedJpEn:
    name: str = ""
    en_name: str = ""
    description: str = ""


# Entity records compare and sort by URL key only, so re-inserting the same
# page into a merge map is idempotent whatever its content.


@dataclass(order=True)
class DevilFruit:
    url: str
    df_type: DfType = field(default=DfType.UNDETERMINED, compare=False)
    df_sub_type: DfSubType | None = field(default=None, compare=False)
    name: str = field(default="", compare=False)
    en_name: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    pic_url: str = field(default="", compare=False)
    non_canon: bool = field(default=False, compare=False)

    @classmethod
    def from_named(
        cls,
        url: str,
        df_type: DfType,
        name_detail: NamedJpEn,
        df_sub_type: DfSubType | None = None,
    ) -> "DevilFruit":
        return cls(
            url=url,
            df_type=df_type,
            df_sub_type=df_sub_type if df_type is DfType.ZOAN else None,
            name=name_detail.name,
            en_name=name_detail.en_name,
            description=name_detail.description,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "df_type": self.df_type.value,
            "df_sub_type": self.df_sub_type.value if self.df_sub_type else None,
            "name": self.name,
            "en_name": self.en_name,
            "description": self.description,
            "pic_url": self.pic_url,
            "non_canon": self.non_canon,
            "df_url": self.url,
        }


@dataclass(frozen=True)
class DfTypeInfo:
    df_type: DfType
    canon_count: int
    non_canon_count: int
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "df_type": self.df_type.value,
            "canon_count": self.canon_count,
            "non_canon_count": self.non_canon_count,
            "description": self.description,
        }


@dataclass(order=True)
class Pirate:
    url: str
    name: str = field(default="", compare=False)
    en_name: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    ship: list[NamedUrl] = field(default_factory=list, compare=False)
    captain: list[NamedUrl] = field(default_factory=list, compare=False)
    pic_url: str = field(default="", compare=False)
    non_canon: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "en_name": self.en_name,
            "description": self.description,
            "ship": [s.to_dict() for s in self.ship],
            "captain": [c.to_dict() for c in self.captain],
            "pic_url": self.pic_url,
            "non_canon": self.non_canon,
            "url": self.url,
        }


@dataclass(order=True)
class Ship:
    url: str
    name: str = field(default="", compare=False)
    en_name: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    affiliation: NamedUrl = field(default_factory=NamedUrl, compare=False)
    status: str = field(default="", compare=False)
    pic_url: str = field(default="", compare=False)
    non_canon: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "en_name": self.en_name,
            "description": self.description,
            "affiliation": self.affiliation.to_dict(),
            "status": self.status,
            "pic_url": self.pic_url,
            "non_canon": self.non_canon,
            "url": self.url,
        }


@dataclass(frozen=True)
class PageMedia:
    """What an entity's own page contributes back to a taxonomy record."""

    pic_url: str = ""
    non_canon: bool = False


T = TypeVar("T")


@dataclass(frozen=True)
class EnrichmentResult(Generic[T]):
    key: str
    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


R = TypeVar("R")
S = TypeVar("S")


@dataclass(frozen=True)
class EnrichmentOutcome(Generic[R, S]):
    records: list[R]
    secondaries: dict[str, S] = field(default_factory=dict)
    failures: list[tuple[str, Exception]] = field(default_factory=list)

    def sorted_secondaries(self) -> list[S]:
        return [self.secondaries[key] for key in sorted(self.secondaries)]


@dataclass(frozen=True)
class ScrapeSummary:
    outputs: dict[str, int]
    failed_total: int

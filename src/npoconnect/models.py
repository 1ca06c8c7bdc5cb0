"""Data models for npoconnect package."""

from dataclasses import dataclass, asdict, field, replace
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class BankingDetails:
    """EFT details published by an organisation for donations."""
    bank_name: str
    account_holder: str
    account_number: str
    branch_code: str
    account_type: str

    @classmethod
    def from_dict(cls, data: dict) -> "BankingDetails":
        return cls(
            bank_name=data.get("bankName", ""),
            account_holder=data.get("accountHolder", ""),
            account_number=data.get("accountNumber", ""),
            branch_code=data.get("branchCode", ""),
            account_type=data.get("accountType", ""),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class AssociatedDocument:
    name: str
    url: str


@dataclass(frozen=True)
class Organization:
    """A registered non-profit organisation in the directory."""
    id: int
    name: str
    sector: str
    primary_objective: str
    address: str
    city: str
    province: str
    contact_number: str
    date_registered: str
    banking_details: Optional[BankingDetails] = None
    logo_url: Optional[str] = None
    theme: Optional[str] = None
    postal_address: Optional[str] = None
    postal_code: Optional[str] = None
    contact_person: Optional[str] = None
    fax_number: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    registration_number: Optional[str] = None
    compliance_status: Optional[str] = None
    beneficiaries_reached: Optional[int] = None
    donor_engagement_level: Optional[str] = None
    keywords: tuple = ()
    current_projects: tuple = ()
    past_projects: tuple = ()
    funding_sources: tuple = ()
    associated_documents: tuple = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Organization":
        """Build a record from the camelCase layout of the dataset file."""
        banking = data.get("bankingDetails")
        return cls(
            id=int(data["id"]),
            name=data["name"],
            sector=data.get("sector", ""),
            primary_objective=data.get("primaryObjective", ""),
            address=data.get("address", ""),
            city=data.get("city", ""),
            province=data.get("province", ""),
            contact_number=data.get("contactNumber", ""),
            date_registered=data.get("dateRegistered", ""),
            banking_details=BankingDetails.from_dict(banking) if banking else None,
            logo_url=data.get("logoUrl"),
            theme=data.get("theme"),
            postal_address=data.get("postalAddress"),
            postal_code=data.get("postalCode"),
            contact_person=data.get("contactPerson"),
            fax_number=data.get("faxNumber"),
            email=data.get("email"),
            website=data.get("website"),
            registration_number=data.get("registrationNumber"),
            compliance_status=data.get("complianceStatus"),
            beneficiaries_reached=data.get("beneficiariesReached"),
            donor_engagement_level=data.get("donorEngagementLevel"),
            keywords=tuple(data.get("keywords") or ()),
            current_projects=tuple(data.get("currentProjects") or ()),
            past_projects=tuple(data.get("pastProjects") or ()),
            funding_sources=tuple(data.get("fundingSources") or ()),
            associated_documents=tuple(
                AssociatedDocument(name=d["name"], url=d["url"])
                for d in data.get("associatedDocuments") or ()
            ),
        )

    @property
    def registration_year(self) -> Optional[int]:
        """Year part of ``date_registered``, or None if it does not parse."""
        try:
            return date.fromisoformat(self.date_registered[:10]).year
        except (TypeError, ValueError):
            return None

    @property
    def can_donate(self) -> bool:
        return self.banking_details is not None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


FILTER_FIELDS = ("name", "city", "sector", "year")


@dataclass(frozen=True)
class FilterState:
    """Directory filters. An empty field places no constraint."""
    name: str = ""
    city: str = ""
    sector: str = ""
    year: str = ""

    def with_field(self, name: str, value: str) -> "FilterState":
        """Return a copy with one field superseded by ``value``."""
        if name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {name}")
        return replace(self, **{name: value})

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.city or self.sector or self.year)


@dataclass(frozen=True)
class FacetSets:
    """Enumerable values for each filterable dimension."""
    cities: list = field(default_factory=list)
    sectors: list = field(default_factory=list)
    years: list = field(default_factory=list)


TASK_KINDS = ("task", "grant")


@dataclass
class Task:
    """A calendar entry: a general task or a grant deadline."""
    id: int
    title: str
    due_date: str
    kind: str = "task"

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        kind = data.get("type", "task")
        if kind not in TASK_KINDS:
            raise ValueError(f"Unknown task type: {kind}")
        return cls(
            id=int(data["id"]),
            title=str(data["title"]),
            due_date=str(data["dueDate"]),
            kind=kind,
        )

    def to_dict(self) -> dict:
        """Convert to the stored JSON layout."""
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date,
            "type": self.kind,
        }

    @property
    def is_grant(self) -> bool:
        return self.kind == "grant"

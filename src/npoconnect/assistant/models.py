"""Data models for the assistant module."""

import re
from dataclasses import dataclass, asdict, field, fields
from typing import Union


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


class _Payload:
    """Shared behaviour of the form payloads."""

    @classmethod
    def from_dict(cls, data: dict):
        """Build a payload from form data with camelCase or snake_case keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                values[name] = "" if value is None else str(value)
        return cls(**values)

    def missing_fields(self) -> list:
        """Names of required fields left blank."""
        return [f.name for f in fields(self) if not getattr(self, f.name).strip()]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ProposalData(_Payload):
    """Inputs of the business proposal generator."""
    npo_name: str = ""
    npo_mission: str = ""
    project_title: str = ""
    project_summary: str = ""
    problem_statement: str = ""
    solution: str = ""
    target_audience: str = ""
    activities: str = ""
    budget: str = ""
    outcomes: str = ""


@dataclass
class MonthlyReportData(_Payload):
    """Inputs of the monthly report generator."""
    npo_name: str = ""
    reporting_period: str = ""
    highlights: str = ""
    challenges: str = ""
    beneficiaries_reached: str = ""
    funds_raised: str = ""
    goals_next_month: str = ""


@dataclass
class DonorMatchData(_Payload):
    """Inputs of the donor matching assistant."""
    npo_mission: str = ""
    funding_needs: str = ""
    region: str = "Gauteng"


GenerationRequest = Union[ProposalData, MonthlyReportData, DonorMatchData]


@dataclass(frozen=True)
class SourceCitation:
    """A web page the donor search grounded its answer on."""
    title: str
    uri: str


@dataclass
class DonorMatchResult:
    """Generated donor recommendations plus their web sources."""
    text: str
    sources: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ChatMessage:
    role: str
    text: str

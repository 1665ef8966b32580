"""
Data models for the Carbon Credit Matcher frontend.

This module defines the ESG profile submitted to the matching service, the
fixed list of form fields used to collect it, and the dataclasses the
matching response is decoded into.
"""

import pandas as pd
from typing import Dict, Any, List, Tuple
from dataclasses import dataclass, field, asdict


SDG_RANGE = range(1, 18)


@dataclass(frozen=True)
class FormField:
    """A single input on the ESG profile form."""

    name: str
    label: str
    kind: str  # text, textarea, number, list, int_list
    help: str = ""


# Rendered top to bottom in this order
PROFILE_FIELDS: Tuple[FormField, ...] = (
    FormField("company_name", "Company name", "text"),
    FormField("industry", "Industry", "text"),
    FormField("description", "Description", "textarea",
              "What the company does and where it operates"),
    FormField("annual_emissions", "Annual emissions (tCO2e)", "number"),
    FormField("carbon_reduction_goal", "Carbon reduction goal (%)", "number"),
    FormField("preferred_project_types", "Preferred project types", "list",
              "Comma-separated, e.g. Reforestation, Solar"),
    FormField("preferred_locations", "Preferred locations", "list",
              "Comma-separated, e.g. Brazil, Kenya"),
    FormField("sdgs", "SDGs", "int_list", "Comma-separated goal numbers from 1 to 17"),
    FormField("environmental_focus", "Environmental focus", "textarea"),
    FormField("social_focus", "Social focus", "textarea"),
    FormField("technology_interests", "Technology interests", "list",
              "Comma-separated"),
)


def split_list(value: Any) -> List[str]:
    """Split comma-separated input into trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip() for item in items if str(item).strip()]


def parse_sdgs(value: Any) -> List[int]:
    """
    Parse comma-separated SDG numbers.

    Args:
        value: Raw form input, e.g. "7, 13, 15"

    Returns:
        List of SDG numbers in input order

    Raises:
        ValueError: If any item is not a whole number between 1 and 17
    """
    sdgs = []
    invalid = []
    for token in split_list(value):
        try:
            number = int(token)
        except ValueError:
            invalid.append(token)
            continue
        if number not in SDG_RANGE:
            invalid.append(token)
            continue
        sdgs.append(number)

    if invalid:
        raise ValueError(f"Invalid SDG numbers: {', '.join(invalid)} (expected 1-17)")
    return sdgs


def _parse_number(value: Any, label: str) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number")


@dataclass
class ESGProfile:
    """Company ESG profile sent to the matching service."""

    company_name: str = ""
    industry: str = ""
    description: str = ""
    annual_emissions: float = 0.0
    carbon_reduction_goal: float = 0.0
    preferred_project_types: List[str] = field(default_factory=list)
    preferred_locations: List[str] = field(default_factory=list)
    sdgs: List[int] = field(default_factory=list)
    environmental_focus: str = ""
    social_focus: str = ""
    technology_interests: List[str] = field(default_factory=list)

    @classmethod
    def from_form(cls, values: Dict[str, Any]) -> "ESGProfile":
        """
        Build a profile from raw form values keyed by field name.

        Args:
            values: Raw widget values, one per entry in PROFILE_FIELDS

        Returns:
            Validated ESGProfile

        Raises:
            ValueError: If a numeric field or the SDG list is invalid
        """
        kwargs: Dict[str, Any] = {}
        for form_field in PROFILE_FIELDS:
            raw = values.get(form_field.name)
            if form_field.kind == "number":
                kwargs[form_field.name] = _parse_number(raw, form_field.label)
            elif form_field.kind == "list":
                kwargs[form_field.name] = split_list(raw)
            elif form_field.kind == "int_list":
                kwargs[form_field.name] = parse_sdgs(raw)
            else:
                kwargs[form_field.name] = (raw or "").strip()

        profile = cls(**kwargs)
        if profile.annual_emissions < 0:
            raise ValueError("Annual emissions cannot be negative")
        if not (0 <= profile.carbon_reduction_goal <= 100):
            raise ValueError("Carbon reduction goal must be between 0 and 100")
        return profile

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the matching endpoint."""
        return asdict(self)


@dataclass
class CarbonCreditOpportunity:
    """Carbon-offset project returned by the matching service."""

    id: int
    name: str
    project_type: str = ""
    location: str = ""
    description: str = ""
    detailed_explanation: str = ""
    sdgs: List[int] = field(default_factory=list)
    environmental_impact: str = ""
    social_impact: str = ""
    annual_co2_reduction: float = 0.0
    total_co2_reduction: float = 0.0
    project_duration: int = 0  # years
    co_benefits: List[str] = field(default_factory=list)
    technology_used: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CarbonCreditOpportunity":
        return cls(
            id=data.get("id", 0),
            name=data.get("name", "Unnamed project"),
            project_type=data.get("project_type", ""),
            location=data.get("location", ""),
            description=data.get("description", ""),
            detailed_explanation=data.get("detailed_explanation", ""),
            sdgs=list(data.get("sdgs") or []),
            environmental_impact=data.get("environmental_impact", ""),
            social_impact=data.get("social_impact", ""),
            annual_co2_reduction=float(data.get("annual_co2_reduction") or 0.0),
            total_co2_reduction=float(data.get("total_co2_reduction") or 0.0),
            project_duration=int(data.get("project_duration") or 0),
            co_benefits=list(data.get("co_benefits") or []),
            technology_used=data.get("technology_used", ""),
        )


@dataclass
class MatchResult:
    """One ranked opportunity with its score and explanation."""

    opportunity: CarbonCreditOpportunity
    match_explanation: str = ""
    short_summary: str = ""
    match_score: float = 0.0  # 0 to 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        return cls(
            opportunity=CarbonCreditOpportunity.from_dict(data.get("opportunity") or {}),
            match_explanation=data.get("match_explanation") or "",
            short_summary=data.get("short_summary") or "",
            match_score=float(data.get("match_score") or 0.0),
        )


@dataclass
class MatchSummary:
    """Aggregate statistics over all returned matches."""

    average_score: float = 0.0
    median_score: float = 0.0
    best_score: float = 0.0
    average_co2_reduction: float = 0.0
    total_co2_reduction: float = 0.0
    number_of_matches: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchSummary":
        return cls(
            average_score=float(data.get("average_score") or 0.0),
            median_score=float(data.get("median_score") or 0.0),
            best_score=float(data.get("best_score") or 0.0),
            average_co2_reduction=float(data.get("average_co2_reduction") or 0.0),
            total_co2_reduction=float(data.get("total_co2_reduction") or 0.0),
            number_of_matches=int(data.get("number_of_matches") or 0),
        )


FRAME_COLUMNS = [
    'name', 'project_type', 'location', 'match_score',
    'annual_co2_reduction', 'total_co2_reduction'
]


@dataclass
class MatchResponse:
    """Decoded response of the matching endpoint."""

    matches: List[MatchResult] = field(default_factory=list)
    summary: MatchSummary = field(default_factory=MatchSummary)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResponse":
        """
        Decode the JSON body returned by the matching service.

        Matches keep the order the service ranked them in. A missing summary
        is replaced by an empty one that still reports the match count.
        """
        matches = [MatchResult.from_dict(m) for m in data.get("matches") or []]
        if data.get("summary"):
            summary = MatchSummary.from_dict(data["summary"])
        else:
            summary = MatchSummary(number_of_matches=len(matches))
        return cls(matches=matches, summary=summary)

    def to_frame(self) -> pd.DataFrame:
        """One row per match, used for the charts and the ranked table."""
        rows = [{
            'name': m.opportunity.name,
            'project_type': m.opportunity.project_type,
            'location': m.opportunity.location,
            'match_score': m.match_score,
            'annual_co2_reduction': m.opportunity.annual_co2_reduction,
            'total_co2_reduction': m.opportunity.total_co2_reduction,
        } for m in self.matches]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

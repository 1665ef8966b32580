"""
Unit tests for the frontend data models.
"""

import pytest

from models import (
    PROFILE_FIELDS,
    ESGProfile,
    MatchResponse,
    parse_sdgs,
    split_list,
)


class TestFormHelpers:
    """Comma-separated input handling."""

    def test_split_list(self):
        assert split_list(" Solar, Wind ,, Hydro ") == ["Solar", "Wind", "Hydro"]
        assert split_list("") == []
        assert split_list(None) == []

    def test_parse_sdgs(self):
        assert parse_sdgs("7, 13,15") == [7, 13, 15]
        assert parse_sdgs("") == []

    def test_parse_sdgs_rejects_out_of_range_and_text(self):
        with pytest.raises(ValueError) as excinfo:
            parse_sdgs("7, 18, climate")
        assert "18" in str(excinfo.value)
        assert "climate" in str(excinfo.value)


class TestESGProfile:
    """Profile construction from form values."""

    def form_values(self, **overrides):
        values = {
            "company_name": " Acme Energy ",
            "industry": "Utilities",
            "description": "Regional power provider.",
            "annual_emissions": 50000.0,
            "carbon_reduction_goal": 30.0,
            "preferred_project_types": "Solar, Reforestation",
            "preferred_locations": "Brazil, Kenya",
            "sdgs": "7, 13",
            "environmental_focus": "Clean energy",
            "social_focus": "Community jobs",
            "technology_interests": "Batteries",
        }
        values.update(overrides)
        return values

    def test_form_fields_cover_profile(self):
        names = [f.name for f in PROFILE_FIELDS]
        assert names == list(ESGProfile().to_payload().keys())

    def test_from_form(self):
        profile = ESGProfile.from_form(self.form_values())
        assert profile.company_name == "Acme Energy"
        assert profile.preferred_project_types == ["Solar", "Reforestation"]
        assert profile.sdgs == [7, 13]
        assert profile.carbon_reduction_goal == 30.0

    def test_payload(self):
        payload = ESGProfile.from_form(self.form_values()).to_payload()
        assert payload["preferred_locations"] == ["Brazil", "Kenya"]
        assert payload["technology_interests"] == ["Batteries"]
        assert payload["annual_emissions"] == 50000.0

    def test_blank_form(self):
        profile = ESGProfile.from_form({})
        assert profile.annual_emissions == 0.0
        assert profile.sdgs == []

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            ESGProfile.from_form(self.form_values(annual_emissions="lots"))
        with pytest.raises(ValueError):
            ESGProfile.from_form(self.form_values(annual_emissions=-1))
        with pytest.raises(ValueError):
            ESGProfile.from_form(self.form_values(carbon_reduction_goal=150))
        with pytest.raises(ValueError):
            ESGProfile.from_form(self.form_values(sdgs="0"))


class TestMatchResponse:
    """Decoding of the matching service response."""

    def test_from_dict(self, sample_response):
        response = MatchResponse.from_dict(sample_response)
        assert len(response.matches) == 2
        first = response.matches[0]
        assert first.opportunity.name == "Andes Reforestation"
        assert first.opportunity.co_benefits == ["Biodiversity", "Water"]
        assert first.short_summary == "Large nature-based project."
        assert first.match_score == pytest.approx(0.91)
        assert response.summary.number_of_matches == 2
        assert response.summary.total_co2_reduction == pytest.approx(15000.5)

    def test_missing_optional_fields(self, sample_response):
        second = MatchResponse.from_dict(sample_response).matches[1]
        assert second.short_summary == ""
        assert second.opportunity.sdgs == []
        assert second.opportunity.project_duration == 0

    def test_missing_summary(self, sample_response):
        response = MatchResponse.from_dict({"matches": sample_response["matches"]})
        assert response.summary.number_of_matches == 2
        assert response.summary.best_score == 0.0

    def test_empty(self):
        response = MatchResponse.from_dict({})
        assert response.matches == []
        assert response.to_frame().empty

    def test_to_frame(self, sample_response):
        df = MatchResponse.from_dict(sample_response).to_frame()
        assert df['name'].tolist() == ["Andes Reforestation", "Kenya Cookstoves"]
        assert df['match_score'].tolist() == pytest.approx([0.91, 0.64])
        assert df['annual_co2_reduction'].tolist() == pytest.approx([12000.0, 3000.5])

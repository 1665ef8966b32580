"""
Shared fixtures for the frontend tests.
"""

import copy

import pytest


SAMPLE_RESPONSE = {
    "matches": [
        {
            "opportunity": {
                "id": 1,
                "name": "Andes Reforestation",
                "project_type": "Reforestation",
                "location": "Peru",
                "description": "Native forest restoration.",
                "sdgs": [13, 15],
                "environmental_impact": "Restores 4,000 ha.",
                "social_impact": "Local jobs.",
                "annual_co2_reduction": 12000,
                "total_co2_reduction": 240000,
                "project_duration": 20,
                "co_benefits": ["Biodiversity", "Water"],
                "technology_used": "Drone seeding",
            },
            "match_explanation": "a. Industry and Focus Area Alignment: Good.",
            "short_summary": "Large nature-based project.",
            "match_score": 0.91,
        },
        {
            "opportunity": {"id": 2, "name": "Kenya Cookstoves", "annual_co2_reduction": 3000.5},
            "match_explanation": "",
            "match_score": 0.64,
        },
    ],
    "summary": {
        "average_score": 0.775,
        "median_score": 0.775,
        "best_score": 0.91,
        "average_co2_reduction": 7500.25,
        "total_co2_reduction": 15000.5,
        "number_of_matches": 2,
    },
}


@pytest.fixture
def sample_response():
    """A two-match response body as returned by the matching service."""
    return copy.deepcopy(SAMPLE_RESPONSE)

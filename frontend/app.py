"""
Streamlit frontend for the Carbon Credit Matcher.

This module renders the company ESG profile form, submits it to the matching
service and displays the ranked carbon-credit opportunities with summary
metrics, charts and the sectioned match explanations.
"""

import logging

import streamlit as st

from explanation import format_sections, parse_explanation, split_sections
from matching_client import MatchingClient, MatchingServiceError, load_config
from models import PROFILE_FIELDS, ESGProfile, FormField, MatchResponse, MatchResult

logger = logging.getLogger(__name__)


@st.cache_resource
def get_client() -> MatchingClient:
    """Build the matching client once per process."""
    return MatchingClient.from_config(load_config())


def _field_key(form_field: FormField) -> str:
    return f"field_{form_field.name}"


def render_field(form_field: FormField) -> None:
    key = _field_key(form_field)
    help_text = form_field.help or None
    if form_field.kind == "number":
        max_value = 100.0 if form_field.name == "carbon_reduction_goal" else None
        st.number_input(form_field.label, min_value=0.0, max_value=max_value,
                        value=0.0, key=key, help=help_text)
    elif form_field.kind == "textarea":
        st.text_area(form_field.label, key=key, help=help_text)
    else:
        st.text_input(form_field.label, key=key, help=help_text)


def _start_search() -> None:
    st.session_state.loading = True


def run_search(client: MatchingClient) -> None:
    """Validate the submitted form and fetch matches."""
    values = {f.name: st.session_state.get(_field_key(f)) for f in PROFILE_FIELDS}
    try:
        profile = ESGProfile.from_form(values)
    except ValueError as e:
        st.session_state.form_error = str(e)
        return

    st.session_state.form_error = None
    with st.spinner("Finding matches..."):
        try:
            st.session_state.results = client.match_opportunities(profile)
        except MatchingServiceError as e:
            # Previous results stay on screen
            logger.error(f"Could not fetch matches for {profile.company_name or 'unnamed company'}: {e}")


def render_summary(results: MatchResponse) -> None:
    summary = results.summary
    st.header("Summary")
    col1, col2, col3 = st.columns(3)
    col1.metric("Average Score", f"{summary.average_score:.2f}")
    col2.metric("Median Score", f"{summary.median_score:.2f}")
    col3.metric("Best Score", f"{summary.best_score:.2f}")

    col4, col5, col6 = st.columns(3)
    col4.metric("Average CO2 Reduction", f"{summary.average_co2_reduction:.2f} tons/year")
    col5.metric("Total CO2 Reduction", f"{summary.total_co2_reduction:.2f} tons/year")
    col6.metric("Number of Matches", summary.number_of_matches)


def render_charts(results: MatchResponse) -> None:
    df = results.to_frame()
    if df.empty:
        return

    chart_df = df.set_index('name')
    left, right = st.columns(2)
    with left:
        st.subheader("Match Score")
        st.bar_chart(chart_df[['match_score']])
    with right:
        st.subheader("Annual CO2 Reduction")
        st.bar_chart(chart_df[['annual_co2_reduction']])

    st.dataframe(df, hide_index=True)


def render_explanation(explanation: str, tolerate_reordering: bool) -> None:
    parser = split_sections if tolerate_reordering else parse_explanation
    for title, body in format_sections(parser(explanation)):
        st.markdown(f"**{title}**")
        st.write(body)


def render_match(rank: int, match: MatchResult, tolerate_reordering: bool) -> None:
    opportunity = match.opportunity
    with st.expander(f"{rank}. {opportunity.name} ({match.match_score:.2f})", expanded=rank == 1):
        if match.short_summary:
            st.caption(match.short_summary)

        overview, impact, explanation = st.tabs(["Overview", "Impact", "Explanation"])
        with overview:
            st.write(f"**Match Score:** {match.match_score:.2f}")
            st.write(f"**Project Type:** {opportunity.project_type}")
            st.write(f"**Location:** {opportunity.location}")
            st.write(f"**Project Duration:** {opportunity.project_duration} years")
            st.write(f"**Technology Used:** {opportunity.technology_used}")
            st.markdown("**Description**")
            st.write(opportunity.description)
            if opportunity.detailed_explanation:
                st.write(opportunity.detailed_explanation)

        with impact:
            st.markdown("**SDGs**")
            st.write(", ".join(f"SDG {sdg}" for sdg in opportunity.sdgs) or "None listed")
            st.markdown("**Environmental Impact**")
            st.write(opportunity.environmental_impact)
            st.markdown("**Social Impact**")
            st.write(opportunity.social_impact)
            st.markdown("**CO2 Reduction**")
            st.write(f"Annual: {opportunity.annual_co2_reduction} tons")
            st.write(f"Total: {opportunity.total_co2_reduction} tons")
            st.markdown("**Co-benefits**")
            for benefit in opportunity.co_benefits:
                st.markdown(f"- {benefit}")

        with explanation:
            render_explanation(match.match_explanation, tolerate_reordering)


def main() -> None:
    st.set_page_config(page_title="Carbon Credit Matcher", layout="wide")
    st.session_state.setdefault("loading", False)
    st.session_state.setdefault("results", None)
    st.session_state.setdefault("form_error", None)

    st.title("Carbon Credit Matcher")
    st.write("Find carbon-credit projects that fit your company's ESG profile")

    tolerate_reordering = st.sidebar.checkbox(
        "Tolerate reordered explanation sections",
        value=False,
        help="Locate section headings anywhere in the explanation instead of in their usual order",
    )

    with st.form("profile_form"):
        for form_field in PROFILE_FIELDS:
            render_field(form_field)
        st.form_submit_button("Find Matches", disabled=st.session_state.loading,
                              on_click=_start_search)

    if st.session_state.loading:
        try:
            run_search(get_client())
        finally:
            st.session_state.loading = False
        st.rerun()

    if st.session_state.form_error:
        st.error(st.session_state.form_error)

    results = st.session_state.results
    if results is not None:
        render_summary(results)
        render_charts(results)
        st.header("Matches")
        for rank, match in enumerate(results.matches, start=1):
            render_match(rank, match, tolerate_reordering)


main()

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))


import pandas as pd
import streamlit as st

from college_paths.core.errors import InvalidInputError
from college_paths.core.inputs import (
    INCOME_BRACKETS,
    INCOME_LABELS,
    MAX_AGE,
    MAX_COLLEGES,
    MIN_AGE,
    LifePathAssumptions,
    StudentProfile,
)
from college_paths.core.loans import amortization_schedule
from college_paths.core.scenarios import base_profile, default_assumptions, sample_colleges
from college_paths.core.simulator import LifePathResult, comparison_frame, simulate_life_paths, timeline_frame
from college_paths.core.transfer import alternatives_frame, transfer_alternatives
from college_paths.logging_config import setup_logging

setup_logging()

st.set_page_config(page_title="Where Does Each College Lead?", layout="wide")


def sidebar_inputs() -> tuple[StudentProfile, LifePathAssumptions]:
    defaults = base_profile()
    assumption_defaults = default_assumptions()
    with st.sidebar.expander("About you", expanded=True):
        income_bracket = st.selectbox(
            "Family income",
            options=list(INCOME_BRACKETS),
            index=INCOME_BRACKETS.index(defaults.income_bracket),
            format_func=lambda bracket: INCOME_LABELS[bracket],
        )
        home_state = st.text_input("Home state (2 letters)", value=defaults.home_state, max_chars=2)
        current_age = st.number_input("Current age", min_value=MIN_AGE, max_value=MAX_AGE, value=defaults.current_age)
        intended_major = st.text_input("Intended major", value=defaults.intended_major)
        career_goal = st.text_input("Career goal", value=defaults.career_goal)
        has_scholarships = st.checkbox("I have scholarships", value=defaults.has_scholarships)
        scholarship_amount = 0
        if has_scholarships:
            scholarship_amount = st.number_input(
                "Scholarships (total over 4 years)",
                min_value=0,
                max_value=400_000,
                value=20_000,
                step=1_000,
                help="Combined grants and scholarships for the whole degree, not a yearly amount.",
            )

    with st.sidebar.expander("Assumptions", expanded=False):
        financed = st.slider(
            "Share of college cost borrowed (%)",
            min_value=0.0,
            max_value=100.0,
            value=assumption_defaults.financed_fraction * 100,
            step=5.0,
        )
        interest = st.slider(
            "Loan interest (annual %)", min_value=0.0, max_value=15.0, value=assumption_defaults.interest_rate * 100, step=0.25
        )
        savings_rate = st.slider(
            "Savings rate (% of salary)", min_value=0.0, max_value=50.0, value=assumption_defaults.savings_rate * 100, step=1.0
        )
        investment_return = st.slider(
            "Investment return (annual %)",
            min_value=0.0,
            max_value=15.0,
            value=assumption_defaults.investment_return * 100,
            step=0.5,
        )

    profile = StudentProfile(
        income_bracket=income_bracket,
        home_state=home_state.strip().upper(),
        intended_major=intended_major,
        career_goal=career_goal,
        has_scholarships=has_scholarships,
        scholarship_amount=float(scholarship_amount),
        current_age=int(current_age),
    )
    assumptions = LifePathAssumptions(
        financed_fraction=financed / 100.0,
        interest_rate=interest / 100.0,
        savings_rate=savings_rate / 100.0,
        investment_return=investment_return / 100.0,
        payment_acceleration=assumption_defaults.payment_acceleration,
        standard_term_years=assumption_defaults.standard_term_years,
        residency_payment=assumption_defaults.residency_payment,
    )
    return profile, assumptions


def render_comparison(results: list[LifePathResult]) -> None:
    st.subheader("Side by side")
    cols = st.columns(len(results))
    for col, result in zip(cols, results):
        col.metric(result.college.name, f"${result.summary.total_debt:,.0f} debt")
        break_even = result.summary.break_even_age
        col.caption(f"Break-even age: {break_even if break_even is not None else 'not reached'}")
        if result.summary.warning:
            col.warning(result.summary.warning)

    table = comparison_frame(results)
    money_columns = [
        "total_cost",
        "aid_adjusted_undergrad",
        "total_debt",
        "peak_debt",
        "monthly_payment",
        "net_worth_at_horizon",
    ]
    for column in money_columns:
        table[column] = table[column].map(lambda x: f"${x:,.0f}" if pd.notna(x) else "n/a")
    st.table(table)

    st.markdown("**Net worth by age**")
    chart = pd.DataFrame(
        {result.college.name: timeline_frame(result).set_index("age")["net_worth"] for result in results}
    )
    st.line_chart(chart, height=320)


def render_timeline(result: LifePathResult, assumptions: LifePathAssumptions) -> None:
    occupation = result.occupation
    cols = st.columns(3)
    cols[0].metric("Career", occupation.title)
    cols[1].metric("Median salary", f"${occupation.median_salary:,.0f}")
    cols[2].metric("Job growth", f"{occupation.growth_rate:.1f}%")
    st.caption(f"Major: {result.major_label}. Salaries for {occupation.location}.")
    if occupation.notes:
        st.info(occupation.notes)
    if result.data_gaps:
        st.caption("Estimated values used for: " + ", ".join(result.data_gaps))

    frame = timeline_frame(result)
    st.line_chart(frame.set_index("age")[["debt", "savings", "net_worth"]], height=260)
    st.dataframe(frame.reset_index(), use_container_width=True)

    summary = result.summary
    with st.expander(f"Loan repayment at {summary.loan_rate * 100:.1f}%", expanded=False):
        st.write(
            f"Monthly payment ${summary.monthly_payment:,.0f}, total interest ${summary.total_interest:,.0f} "
            f"on peak debt of ${summary.peak_debt:,.0f}."
        )
        if summary.peak_debt > 0:
            schedule = amortization_schedule(summary.peak_debt, summary.loan_rate, assumptions.display_loan_term_years)
            st.line_chart(schedule[["ending_balance"]], height=200)


def render_alternatives(result: LifePathResult, profile: StudentProfile, catalog: dict) -> None:
    alternatives = transfer_alternatives(result.college, profile, catalog.values())
    if len(alternatives) < 2:
        return
    st.markdown("**Start at a community college?**")
    table = alternatives_frame(alternatives).set_index("path")
    for column in ["years_1_2", "years_3_4", "total_cost", "savings"]:
        table[column] = table[column].map(lambda x: f"${x:,.0f}")
    table["savings_percent"] = table["savings_percent"].map(lambda x: f"{x}%")
    st.table(table)


def main():
    st.title("Where Does Each College Lead?")
    st.write(
        "Compare up to four colleges by projecting cost, debt, earnings, and net worth from enrollment through the early career."
    )

    profile, assumptions = sidebar_inputs()
    catalog = {college.name: college for college in sample_colleges()}
    chosen = st.multiselect(
        f"Colleges to compare (up to {MAX_COLLEGES})",
        options=list(catalog),
        default=list(catalog)[:2],
        max_selections=MAX_COLLEGES,
    )

    run_btn = st.button("Generate life paths", type="primary")
    if not run_btn:
        st.info("Pick colleges, adjust inputs in the sidebar, and click **Generate life paths**.")
        return

    try:
        results = simulate_life_paths(
            [catalog[name] for name in chosen], profile, assumptions=assumptions, max_workers=MAX_COLLEGES
        )
    except InvalidInputError as exc:
        st.error(f"Unable to generate life paths: {exc}")
        return

    render_comparison(results)
    tabs = st.tabs([result.college.name for result in results])
    for tab, result in zip(tabs, results):
        with tab:
            render_timeline(result, assumptions)
            render_alternatives(result, profile, catalog)


if __name__ == "__main__":
    main()

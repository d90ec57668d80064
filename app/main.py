"""
Streamlit Frontend for the Insurance Gap Calculator

This is the screen an advisor works through with a client.

DESIGN PRINCIPLES:
1. One simple form, one result page
2. Every keystroke goes through the field normalizers
3. Saving and deleting history are explicit actions
4. Clear feedback for all operations

The UI holds no business logic; it only forwards events to the
GapAnalysisSession and renders what the session derives.
"""

from datetime import datetime

import streamlit as st

from src.config import get_settings, validate_all_settings
from src.models.record import Gender, ReplacementYears
from src.orchestrator import GapAnalysisSession, create_app_components
from src.services.export import CsvReportAdapter
from src.services.records import RecordValidationError
from src.utils import format_currency, format_percent


# Page configuration
st.set_page_config(
    page_title="Insurance Gap Calculator",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)


LIABILITY_LABELS = {
    "housing_loan": "Housing Loan",
    "car_loan": "Car Loan",
    "personal_loan": "Personal Loan",
    "credit_card": "Credit Card",
    "business_loan": "Business Loan",
    "study_loan": "Study Loan",
    "other_liabilities": "Other Liabilities",
}

EXPENSE_LABELS = {
    "housing_installment": "Housing Installment",
    "car_installment": "Car Installment",
    "credit_card_payment": "Credit Card",
    "food_groceries": "Food & Groceries",
    "utilities": "Utilities",
    "phone_internet": "Phone & Internet",
    "children_education": "Children Education",
    "insurance_premium": "Insurance Premium",
    "transport": "Transport",
    "parents_allowance": "Parents Allowance",
    "childcare": "Childcare",
    "entertainment": "Entertainment",
    "savings": "Savings",
    "others": "Others",
}

COVERAGE_LABELS = {
    "life_tpd": "Life / TPD",
    "critical_illness": "Critical Illness",
}


def get_session() -> GapAnalysisSession:
    """One GapAnalysisSession per browser session."""
    if "gap_session" not in st.session_state:
        session, _ = create_app_components()
        st.session_state.gap_session = session
    return st.session_state.gap_session


def widget_key(section: str, name: str) -> str:
    return f"money::{section}::{name}"


def resync_widgets(session: GapAnalysisSession) -> None:
    """Copy normalizer state into widget state after reset / load."""
    for key in list(st.session_state.keys()):
        if isinstance(key, str) and key.startswith("money::"):
            _, section, name = key.split("::")
            st.session_state[key] = session.money_field(section, name).draft
    dob = session.dob_field
    st.session_state["dob_day"] = dob.day
    st.session_state["dob_month"] = dob.month
    st.session_state["dob_year"] = dob.year


def on_money_edit(section: str, name: str) -> None:
    session = get_session()
    key = widget_key(section, name)
    if not session.edit_money(section, name, st.session_state[key]):
        # Rejected keystroke: put the previous draft back
        st.session_state[key] = session.money_field(section, name).draft


def money_input(session: GapAnalysisSession, section: str, name: str, label: str) -> None:
    key = widget_key(section, name)
    if key not in st.session_state:
        st.session_state[key] = session.money_field(section, name).draft
    symbol = get_settings().app.currency_symbol
    st.text_input(
        f"{label} ({symbol})",
        key=key,
        placeholder="0",
        on_change=on_money_edit,
        args=(section, name),
    )


def on_dob_change(part: str) -> None:
    session = get_session()
    dob = session.dob_field
    value = st.session_state[f"dob_{part}"]
    if value is None:
        return
    getattr(dob, f"select_{part}")(value)
    # Month / year changes may clamp the day
    st.session_state["dob_day"] = dob.day


def render_dob(session: GapAnalysisSession) -> None:
    dob = session.dob_field
    for part in ("day", "month", "year"):
        if f"dob_{part}" not in st.session_state:
            st.session_state[f"dob_{part}"] = getattr(dob, part)

    st.markdown("**Date of Birth**")
    col_d, col_m, col_y = st.columns(3)
    with col_d:
        st.selectbox(
            "Day",
            options=dob.day_options(),
            key="dob_day",
            index=None,
            on_change=on_dob_change,
            args=("day",),
        )
    with col_m:
        months = dict(dob.month_options())
        st.selectbox(
            "Month",
            options=list(months),
            format_func=lambda m: months[m],
            key="dob_month",
            index=None,
            on_change=on_dob_change,
            args=("month",),
        )
    with col_y:
        st.selectbox(
            "Year",
            options=dob.year_options(span=get_settings().app.dob_year_span),
            key="dob_year",
            index=None,
            on_change=on_dob_change,
            args=("year",),
        )


def render_form_page(session: GapAnalysisSession) -> None:
    """Render the data entry form."""
    st.title("🛡️ Insurance Gap Calculator")
    record = session.record

    st.subheader("Basic Info")
    col1, col2 = st.columns(2)
    with col1:
        name = st.text_input("Full Name", value=record.basic.full_name, placeholder="e.g. John Doe")
        if name != record.basic.full_name:
            session.set_full_name(name)
        contact = st.text_input("Contact Number", value=record.basic.contact_number, placeholder="+60...")
        if contact != record.basic.contact_number:
            session.set_contact_number(contact)
    with col2:
        gender = st.selectbox(
            "Gender",
            options=list(Gender),
            index=list(Gender).index(record.basic.gender),
            format_func=lambda g: g.value,
        )
        session.set_gender(gender)
        money_input(session, "basic", "annual_income", "Annual Income")
    render_dob(session)

    st.subheader("Liabilities")
    cols = st.columns(2)
    for idx, (name, label) in enumerate(LIABILITY_LABELS.items()):
        with cols[idx % 2]:
            money_input(session, "liabilities", name, label)
    st.info(f"Total Liabilities: {format_currency(session.metrics.total_liabilities)}")

    st.subheader("Monthly Expenses")
    cols = st.columns(2)
    for idx, (name, label) in enumerate(EXPENSE_LABELS.items()):
        with cols[idx % 2]:
            money_input(session, "expenses", name, label)
    st.info(f"Total Commitment: {format_currency(session.metrics.monthly_commitment)}")

    st.subheader("Existing Coverage")
    cols = st.columns(2)
    for idx, (name, label) in enumerate(COVERAGE_LABELS.items()):
        with cols[idx % 2]:
            money_input(session, "coverage", name, label)
    years = st.radio(
        "Income Replacement",
        options=[int(y) for y in ReplacementYears],
        index=[int(y) for y in ReplacementYears].index(
            int(record.coverage.ci_income_replacement_years)
        ),
        format_func=lambda y: f"{y} Years",
        horizontal=True,
        help="Recommended period for full recovery",
    )
    session.set_replacement_years(years)


def render_results_page(session: GapAnalysisSession) -> None:
    """Render the gap analysis."""
    record = session.record
    metrics = session.metrics
    ratios = session.ratios
    assessment = session.assessment

    st.title(record.basic.full_name or "Valued Client")
    st.caption("Gap Analysis for Financial Security")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(
            f"Debt Gap ({assessment.debt.value.title()})",
            format_currency(metrics.debt_shortfall),
        )
        st.caption(f"Total Liabilities: {format_currency(metrics.total_liabilities)}")
    with col2:
        st.metric(
            f"CI Gap ({assessment.critical_illness.value.title()})",
            format_currency(metrics.ci_shortfall),
        )
        st.caption(f"Total Need: {format_currency(metrics.total_ci_need)}")
    with col3:
        st.metric("Monthly Surplus", format_currency(metrics.affordability))
        st.caption(f"{assessment.cash_flow.value.title()} cash flow")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### Debt Coverage Analysis")
        st.progress(ratios.debt_coverage_percent / 100, text=f"Covered {format_percent(ratios.debt_coverage_percent)}")
        st.markdown(f"- Total Liabilities: **{format_currency(metrics.total_liabilities)}**")
        st.markdown(f"- Existing Coverage: -{format_currency(record.coverage.life_tpd)}")
        st.markdown(f"- Shortfall: **{format_currency(metrics.debt_shortfall)}**")
    with col2:
        st.markdown("#### Critical Illness Analysis")
        st.progress(ratios.ci_coverage_percent / 100, text=f"Covered {format_percent(ratios.ci_coverage_percent)}")
        st.markdown(f"- Monthly Expenses: {format_currency(metrics.monthly_commitment)}")
        st.markdown(f"- Replacement Period: {int(record.coverage.ci_income_replacement_years)} Years")
        st.markdown(f"- Total CI Needed: **{format_currency(metrics.total_ci_need)}**")
        st.markdown(f"- Existing Coverage: -{format_currency(record.coverage.critical_illness)}")
        st.markdown(f"- Shortfall: **{format_currency(metrics.ci_shortfall)}**")

    st.markdown("---")
    col1, col2, col3 = st.columns(3)
    with col3:
        report = session.export(CsvReportAdapter(get_settings().app.currency_symbol))
        if report.success:
            st.download_button(
                "📥 Download Report (CSV)",
                data=report.content,
                file_name=report.filename,
                mime=report.mime_type,
            )
        else:
            st.error(f"Report unavailable: {report.error_message}")
    with col1:
        if st.button("💾 Save to History", type="primary"):
            try:
                saved = session.save()
                st.success(f"Saved {saved.client_name}")
            except RecordValidationError as e:
                st.error(e.message)
    with col2:
        if st.button("🔄 Start New Calculation"):
            session.reset()
            resync_widgets(session)
            st.rerun()


def render_history_page(session: GapAnalysisSession) -> None:
    """Render saved client records."""
    st.title("📂 Client History")

    query = st.text_input("Search by name or contact number")
    records = session.history(query)

    if not records:
        st.info("No saved records yet.")
        return

    for saved in records:
        saved_at = saved.timestamp.astimezone().strftime("%d %b %Y %H:%M")
        with st.expander(f"{saved.client_name} · {saved_at}"):
            st.markdown(f"Contact: {saved.contact_number or '-'}")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Load", key=f"load::{saved.id}"):
                    session.load(saved.id)
                    resync_widgets(session)
                    st.rerun()
            with col2:
                confirmed = st.checkbox("Confirm delete", key=f"confirm::{saved.id}")
                if st.button("Delete", key=f"delete::{saved.id}", disabled=not confirmed):
                    session.delete(saved.id, confirmed=confirmed)
                    st.rerun()


def render_settings_page() -> None:
    """Render the settings page."""
    st.title("⚙️ Settings")

    status = validate_all_settings()
    for key in ("app", "storage", "google_sheets"):
        if key not in status:
            continue
        if status[key]:
            st.success(f"✅ {key} - OK")
        else:
            st.error(f"❌ {key} - {status.get(f'{key}_error', 'Not configured')}")

    st.markdown(f"Storage backend: `{get_settings().storage.backend}`")
    st.caption(f"Checked at {datetime.now().strftime('%H:%M:%S')}")


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("🛡️ Gap Calculator")
    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Navigate to:",
        ["📝 Client Data", "📊 Analysis Result", "📂 History", "⚙️ Settings"],
        index=0,
    )

    if page == "📝 Client Data":
        render_form_page(session)
    elif page == "📊 Analysis Result":
        render_results_page(session)
    elif page == "📂 History":
        render_history_page(session)
    elif page == "⚙️ Settings":
        render_settings_page()


if __name__ == "__main__":
    main()

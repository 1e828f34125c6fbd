from __future__ import annotations

import streamlit as st

from estimation.footprint import STRATEGIES
from estimation.rating import emission_rating
from ui.config import AppConfig
from ui.form_controller import FormController, FormState
from ui.logging import configure_logging

st.set_page_config(page_title="Website Carbon Footprint Calculator")
st.title("Website Carbon Footprint Calculator")

st.caption(
    "Enter a page URL and your details. The page is measured with Google PageSpeed Insights, "
    "its transfer size is converted to an approximate CO2 estimate, and the result is saved."
)

_STATUS_TEXT = {
    "validating": "Checking the form...",
    "fetching": "Measuring the page with PageSpeed Insights...",
    "saving": "Saving the result...",
}


# --------- Helpers ---------
@st.cache_resource
def load_config() -> AppConfig:
    """Read the environment and set up logging once per server process."""
    config = AppConfig.from_env()
    configure_logging(config.log_level_value)
    return config


def get_controller() -> FormController:
    """One controller per browser session, kept in session_state."""
    if "audit_form" not in st.session_state:
        st.session_state["audit_form"] = FormController(load_config())
    return st.session_state["audit_form"]


def render_result(state: FormState) -> None:
    if state.result is None:
        return
    for line in state.result.display_lines():
        st.write(line)
    rating = emission_rating(state.result.grams_value)
    st.write(f"Emission rating: **{rating.grade}** ({rating.label})")


controller = get_controller()

# --------- Form ---------
url = st.text_input("URL", placeholder="Enter URL", key="url")
name = st.text_input("Name", placeholder="Your Name", key="name")
email = st.text_input("Email", placeholder="Your Email", key="email")
strategy = st.selectbox(
    "Device",
    list(STRATEGIES),
    format_func=str.capitalize,
    key="strategy",
)

if not controller.state.in_flight:
    controller.update_fields(url=url, name=name, email=email, strategy=strategy)

run = st.button("Analyze", type="primary", disabled=controller.state.in_flight, key="analyze")

if run and not controller.state.in_flight:
    status_line = st.empty()

    def show_status(state: FormState) -> None:
        status_line.caption(_STATUS_TEXT.get(state.status, ""))

    controller.on_change = show_status
    try:
        with st.spinner("Analyzing..."):
            controller.submit()
    finally:
        controller.on_change = None
        status_line.empty()

state = controller.state
if state.error:
    st.error(state.error)
render_result(state)

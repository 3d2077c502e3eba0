"""Streamlit entry point for the finance stats mini-app."""

from __future__ import annotations

import logging
from html import escape

import streamlit as st
import streamlit.components.v1 as components
from finstats import utils, viz
from finstats.client import StatsClient
from finstats.config import configure_logging, get_settings, is_local_host, resolve_base_url
from finstats.host import HostContext, apply_host_theme, resolve_user_id, same_origin
from finstats.state import CategoryBar, DashboardController, HistoryView, OverviewView, Status, Tab

logger = logging.getLogger("finstats.app")

DELETE_WARNING = (
    "Barcha ma'lumotlaringiz butunlay o'chirib yuboriladi. "
    "Bu amalni qaytarib bo'lmaydi. Ishonchingiz komilmi?"
)

STYLES = """
<style>
:root {
    --bg-main: #0B1120;
    --bg-card: #151F32;
    --text-main: #F1F5F9;
    --text-muted: #8B9BB4;
    --accent-green: #10b981;
    --accent-red: #ef4444;
    --app-radius-lg: 20px;
}

[data-testid="stAppViewContainer"], [data-testid="stHeader"] {
    background: var(--bg-main);
    color: var(--text-main);
}

.block-container {
    max-width: 520px;
    padding-top: 1.2rem;
    padding-bottom: 6rem;
}

.hero-card {
    background: linear-gradient(135deg, #1e3a8a, #0f172a);
    border-radius: var(--app-radius-lg);
    padding: 1.4rem 1.5rem;
    margin-bottom: 1rem;
}

.hero-label {
    font-size: 0.85rem;
    color: var(--text-muted);
    margin-bottom: 0.35rem;
}

.hero-amount {
    font-size: 2rem;
    font-weight: 700;
    color: #ffffff;
}

.hero-currency {
    margin-left: 0.4rem;
    font-size: 1rem;
    color: var(--text-muted);
}

.quick-stat {
    background: var(--bg-card);
    border-radius: 16px;
    padding: 0.9rem 1rem;
}

.stat-header {
    font-size: 0.8rem;
    color: var(--text-muted);
}

.stat-val {
    font-size: 1.3rem;
    font-weight: 700;
}

.text-income { color: var(--accent-green); }
.text-expense { color: var(--accent-red); }

.section-title {
    font-size: 1rem;
    font-weight: 600;
    color: var(--text-main);
    margin: 0.4rem 0 0.8rem 0;
}

.bar-row { margin-bottom: 0.85rem; }

.bar-head {
    display: flex;
    justify-content: space-between;
    font-size: 0.85rem;
    font-weight: 600;
}

.bar-track {
    height: 6px;
    margin-top: 6px;
    background: rgba(255, 255, 255, 0.05);
    border-radius: 4px;
    overflow: hidden;
}

.bar-fill { height: 100%; border-radius: 4px; }

.tx-item {
    display: flex;
    justify-content: space-between;
    align-items: center;
    background: var(--bg-card);
    border-radius: 14px;
    padding: 0.75rem 0.9rem;
    margin-bottom: 0.55rem;
}

.tx-desc { font-weight: 600; color: var(--text-main); }
.tx-date { font-size: 0.78rem; color: var(--text-muted); }
.tx-amount { font-weight: 700; }

.empty-state {
    text-align: center;
    padding: 30px;
    color: var(--text-muted);
}

/* Treat the container that includes the marker as a modal */
div[data-testid="stVerticalBlock"]:has(#delete-modal-marker):not(:has(div[data-testid="stVerticalBlock"] #delete-modal-marker)) {
    position: fixed;
    top: 30%;
    left: 50%;
    transform: translateX(-50%);
    width: 85%;
    max-width: 340px;
    z-index: 1000;
    background: var(--bg-card);
    border-radius: var(--app-radius-lg);
    border: 1px solid rgba(255, 255, 255, 0.05);
    padding: 1.5rem;
    box-shadow: 0 0 0 100vmax rgba(11, 17, 32, 0.8);
}
</style>
"""


@st.cache_resource(show_spinner=False)
def _api_base_url(hostname: str | None, origin: str) -> str:
    # Resolved once per process and host; never revisited mid-session.
    base = resolve_base_url(get_settings().api_url, hostname) or origin
    logger.info("API base URL resolved to %r", base or "(same origin)")
    return base


def _create_controller() -> DashboardController:
    settings = get_settings()
    headers = dict(st.context.headers)
    host = HostContext.from_request(st.query_params.to_dict(), headers)
    user_id, used_fallback = resolve_user_id(host, settings)

    client = StatsClient(_api_base_url(host.hostname, same_origin(headers)), timeout=settings.request_timeout)
    controller = DashboardController(client, user_id, timezone=settings.timezone)

    st.session_state["host"] = host
    st.session_state["fallback_user"] = used_fallback and not is_local_host(host.hostname)
    return controller


def _get_controller() -> DashboardController:
    controller = st.session_state.get("controller")
    if controller is None:
        controller = _create_controller()
        st.session_state["controller"] = controller
        with st.spinner():
            controller.initialize()
    return controller


def _render_bars(bars: list[CategoryBar], kind: str) -> None:
    color = "var(--accent-green)" if kind == "income" else "var(--accent-red)"
    rows = []
    for bar in bars:
        amount = utils.format_signed(bar.value, kind)
        rows.append(
            f"""
            <div class="bar-row">
              <div class="bar-head">
                <span>{escape(bar.category)}</span>
                <span style="color: var(--text-muted)">{amount} {utils.CURRENCY}</span>
              </div>
              <div class="bar-track"><div class="bar-fill" style="width: {bar.percent}%; background: {color}"></div></div>
            </div>
            """
        )
    st.markdown("".join(rows), unsafe_allow_html=True)


def _render_overview(view: OverviewView) -> None:
    st.markdown(
        f"""
        <div class="hero-card">
          <div class="hero-label">Joriy Balans</div>
          <span class="hero-amount">{view.balance_text}</span>
          <span class="hero-currency">{utils.CURRENCY}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )

    income_col, expense_col = st.columns(2)
    income_col.markdown(
        f'<div class="quick-stat"><div class="stat-header">Oylik Kirim</div>'
        f'<div class="stat-val text-income">{view.income_text}</div></div>',
        unsafe_allow_html=True,
    )
    expense_col.markdown(
        f'<div class="quick-stat"><div class="stat-header">Oylik Chiqim</div>'
        f'<div class="stat-val text-expense">{view.expense_text}</div></div>',
        unsafe_allow_html=True,
    )

    st.markdown('<div class="section-title">Haftalik Dinamika</div>', unsafe_allow_html=True)
    st.plotly_chart(viz.plot_weekly_trend(view.weekly), use_container_width=True, config={"displayModeBar": False})

    if view.income_bars:
        st.markdown('<div class="section-title">Daromad Turlari (Bu oy)</div>', unsafe_allow_html=True)
        _render_bars(view.income_bars, "income")

    if view.expense_bars:
        st.markdown('<div class="section-title">Xarajatlar Tahlili (Grafik)</div>', unsafe_allow_html=True)
        st.plotly_chart(
            viz.plot_category_donut(view.expense_breakdown),
            use_container_width=True,
            config={"displayModeBar": False},
        )
        st.markdown('<div class="section-title">Xarajat Turlari (Bu oy)</div>', unsafe_allow_html=True)
        _render_bars(view.expense_bars, "expense")


def _render_history(controller: DashboardController, view: HistoryView) -> None:
    title_col, button_col = st.columns([3, 1], vertical_alignment="center")
    title_col.markdown('<div class="section-title">Barcha Amaliyotlar</div>', unsafe_allow_html=True)
    button_col.button("Tozalash", type="primary", on_click=controller.request_delete, use_container_width=True)

    if view.is_empty:
        st.markdown(f'<div class="empty-state">{view.placeholder}</div>', unsafe_allow_html=True)
        return

    items = []
    for row in view.rows:
        css = "text-income" if row.kind == "income" else "text-expense"
        items.append(
            f"""
            <div class="tx-item">
              <div>
                <div class="tx-desc">{escape(row.description)}</div>
                <div class="tx-date">{row.date_text} &bull; {escape(row.category_label)}</div>
              </div>
              <div class="tx-amount {css}">{row.amount_text}</div>
            </div>
            """
        )
    st.markdown("".join(items), unsafe_allow_html=True)


def _render_delete_modal(controller: DashboardController) -> None:
    with st.container():
        st.markdown('<span id="delete-modal-marker"></span>', unsafe_allow_html=True)
        st.markdown("### Diqqat!")
        st.caption(DELETE_WARNING)
        cancel_col, confirm_col = st.columns(2)
        cancel_col.button("Bekor qilish", on_click=controller.cancel_delete, use_container_width=True)
        if confirm_col.button("O'chirish", type="primary", use_container_width=True):
            with st.spinner():
                controller.confirm_delete()
            st.rerun()


def _render_navigation(controller: DashboardController) -> None:
    active = controller.state.active_tab
    overview_col, history_col = st.columns(2)
    overview_col.button(
        "Asosiy",
        type="primary" if active is Tab.OVERVIEW else "secondary",
        on_click=controller.select_tab,
        args=(Tab.OVERVIEW,),
        use_container_width=True,
    )
    history_col.button(
        "Tarix",
        type="primary" if active is Tab.HISTORY else "secondary",
        on_click=controller.select_tab,
        args=(Tab.HISTORY,),
        use_container_width=True,
    )


def main() -> None:
    """Render the finance stats mini-app."""

    st.set_page_config(page_title="Moliya", page_icon="💰", layout="centered")
    configure_logging()
    st.markdown(STYLES, unsafe_allow_html=True)

    controller = _get_controller()
    if not st.session_state.get("themed"):
        apply_host_theme(st.session_state["host"], lambda html: components.html(html, height=0))
        st.session_state["themed"] = True

    if st.session_state.get("fallback_user"):
        st.warning("Telegram foydalanuvchisi aniqlanmadi: sinov identifikatori ishlatilmoqda.")

    state = controller.state
    if state.status is Status.LOADING:
        st.caption("Yuklanmoqda...")
        return
    if state.status is Status.ERROR:
        st.markdown(
            f"<div style='text-align: center; margin-top: 50px'><h3>Xatolik yuz berdi</h3>"
            f"<p>{escape(state.error_message or '')}</p></div>",
            unsafe_allow_html=True,
        )
        return

    if state.notice:
        st.error(state.notice)
        st.button("OK", on_click=controller.dismiss_notice)

    if state.active_tab is Tab.OVERVIEW:
        _render_overview(controller.overview())
    else:
        _render_history(controller, controller.history())

    st.divider()
    _render_navigation(controller)

    if state.delete_confirmation_open:
        _render_delete_modal(controller)


if __name__ == "__main__":
    main()

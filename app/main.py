import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from expenso import config
from expenso.events import TRANSACTION_ADDED, INVESTMENT_ADDED, GOAL_ADDED, GOAL_UPDATED, GOAL_DELETED
from expenso.export import export_csv, format_date, format_rupee
from expenso.filters import filter_transactions, paginate, running_balances
from expenso.logging_config import setup_logger
from expenso.services import DashboardService, default_calculators
from expenso.store import ExpenseStore, GoalNotFoundError
from expenso.transforms import load_seed
from expenso.validation import (
    field_errors,
    validate_credit,
    validate_debit,
    validate_goal,
    validate_investment,
)

logger = setup_logger(__name__)

st.set_page_config(page_title="Expenso", layout="wide")


def _record_event(event, payload: dict) -> dict:
    st.session_state.event_history.append({
        "event": event.name,
        "timestamp": datetime.now().strftime("%H:%M:%S"),
        **{k: v for k, v in payload.items() if k in ("goal_name", "amount", "type")},
    })
    return {}


if "store" not in st.session_state:
    st.session_state.store = ExpenseStore.from_seed(config.SEED_PATH)
    logger.info(f"Session started with seed data from {config.SEED_PATH}")
    st.session_state.event_history = []
    st.session_state.alerts = []
    for name in (TRANSACTION_ADDED, INVESTMENT_ADDED, GOAL_ADDED, GOAL_UPDATED, GOAL_DELETED):
        st.session_state.store.bus.subscribe(name, _record_event)

if "dark_mode" not in st.session_state:
    st.session_state.dark_mode = True

store: ExpenseStore = st.session_state.store
template = "plotly_dark" if st.session_state.dark_mode else "plotly_white"


def show_field_error(errors: dict, field: str) -> None:
    if field in errors:
        st.caption(f":red[{errors[field]}]")


def collect_alerts() -> None:
    for result in store.last_results:
        if "alert" in result:
            st.session_state.alerts.append({
                "message": result["alert"],
                "timestamp": datetime.now().strftime("%H:%M:%S"),
            })


st.sidebar.markdown("### 💰 Expenso")
menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "➕ Add Transaction", "📒 Passbook", "🎯 Goals", "⚙️ Settings"]
)

if st.session_state.alerts:
    st.sidebar.markdown("---")
    for alert in reversed(st.session_state.alerts[-3:]):
        st.sidebar.success(f"🎉 [{alert['timestamp']}] {alert['message']}")

if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    rpt = DashboardService(default_calculators()).report(store)
    result = rpt["result"]
    for err in rpt["errors"]:
        st.warning(f"{err['calculator']}: {err['error']}")

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Total Income", format_rupee(result.get("income", 0)))
    with k2:
        st.metric("Total Expenses", format_rupee(result.get("expenses", 0)))
    with k3:
        st.metric("Current Balance", format_rupee(result.get("balance", 0)))
    with k4:
        st.metric("Savings Rate", f"{result.get('savings_rate', 0):.1f}%")

    col_pie, col_daily = st.columns(2)
    with col_pie:
        cats = result.get("categories", [])
        if cats:
            df_cat = pd.DataFrame([{"Category": c.category, "Amount": c.amount} for c in cats])
            fig_cat = px.pie(
                df_cat,
                values="Amount",
                names="Category",
                title="Expenses by Category",
                color="Category",
                color_discrete_map={c.category: c.color for c in cats},
                template=template,
            )
            st.plotly_chart(fig_cat, use_container_width=True)
        else:
            st.info("No expenses recorded yet")

    with col_daily:
        daily = result.get("daily", [])
        fig_daily = px.bar(
            x=[d.label for d in daily],
            y=[d.amount for d in daily],
            labels={"x": "Day", "y": f"Expenses ({config.CURRENCY_SYMBOL})"},
            title="Last 7 Days",
            template=template,
        )
        st.plotly_chart(fig_daily, use_container_width=True)

    weekly = result.get("weekly", [])
    fig_week = go.Figure()
    fig_week.add_trace(go.Bar(x=[w.label for w in weekly], y=[w.income for w in weekly],
                              name="Income", marker_color=config.COLORS["income"]))
    fig_week.add_trace(go.Bar(x=[w.label for w in weekly], y=[w.expenses for w in weekly],
                              name="Expenses", marker_color=config.COLORS["expense"]))
    fig_week.update_layout(title="Weekly Trends (weeks starting Monday)", barmode="group",
                           template=template, margin=dict(t=40, b=10, l=10, r=10))
    st.plotly_chart(fig_week, use_container_width=True)

    col_month, col_window = st.columns(2)
    with col_month:
        years = store.available_years()
        year = st.selectbox("Year", years, index=0)
        monthly = store.monthly_expenses(year)
        fig_month = go.Figure()
        fig_month.add_trace(go.Scatter(
            x=[m.month for m in monthly],
            y=[m.total for m in monthly],
            mode="lines+markers",
            name="Monthly Expenses",
            fill="tozeroy",
        ))
        fig_month.update_layout(title=f"Monthly Expenses ({year})", template=template,
                                margin=dict(t=40, b=10, l=10, r=10))
        st.plotly_chart(fig_month, use_container_width=True)

    with col_window:
        center = st.date_input("Around date", value=store.today(), key="daily_center")
        breakdown = store.daily_breakdown(center)
        fig_window = go.Figure()
        fig_window.add_trace(go.Bar(x=[d.label for d in breakdown], y=[d.income for d in breakdown],
                                    name="Income", marker_color=config.COLORS["income"]))
        fig_window.add_trace(go.Bar(x=[d.label for d in breakdown], y=[d.expenses for d in breakdown],
                                    name="Expenses", marker_color=config.COLORS["expense"]))
        fig_window.update_layout(title="Daily Income vs Expenses", barmode="group", template=template,
                                 margin=dict(t=40, b=10, l=10, r=10))
        st.plotly_chart(fig_window, use_container_width=True)

elif menu == "➕ Add Transaction":
    st.title("➕ Add Transaction")
    tab_debit, tab_credit = st.tabs(["💸 Expense", "💵 Income"])

    with tab_debit:
        errors = st.session_state.get("debit_errors", {})
        with st.form("debit_form", clear_on_submit=False):
            amount = st.text_input("Amount (₹)", help="Enter the expense amount in rupees")
            show_field_error(errors, "amount")
            category = st.selectbox("Category", [""] + config.DEBIT_CATEGORIES)
            show_field_error(errors, "category")
            custom_category = st.text_input("Custom category (when 'Others' is selected)")
            show_field_error(errors, "custom_category")
            tx_date = st.date_input("Date", value=store.today(), key="debit_date")
            notes = st.text_input("Notes (optional)", key="debit_notes")
            submitted = st.form_submit_button("Save Expense")

        if submitted:
            result = validate_debit(amount, category, custom_category, tx_date, notes)
            st.session_state.debit_errors = field_errors(result)
            if result.is_right():
                t = store.add_transaction(**result.get_or_else({}))
                st.session_state.flash = f"✅ Expense of {format_rupee(t.amount)} saved under {t.category}"
            st.rerun()

    with tab_credit:
        errors = st.session_state.get("credit_errors", {})
        with st.form("credit_form", clear_on_submit=False):
            source = st.selectbox("Source", [""] + config.CREDIT_SOURCES)
            show_field_error(errors, "source")
            amount = st.text_input("Amount (₹)", key="credit_amount")
            show_field_error(errors, "amount")
            tx_date = st.date_input("Date", value=store.today(), key="credit_date")
            notes = st.text_input("Notes (optional)", key="credit_notes")
            submitted = st.form_submit_button("Save Income")

        if submitted:
            result = validate_credit(amount, source, tx_date, notes)
            st.session_state.credit_errors = field_errors(result)
            if result.is_right():
                t = store.add_transaction(**result.get_or_else({}))
                st.session_state.flash = f"✅ Income of {format_rupee(t.amount)} from {t.source} saved"
            st.rerun()

    if st.session_state.get("flash"):
        st.success(st.session_state.pop("flash"))

elif menu == "📒 Passbook":
    st.title("📒 Passbook")

    col_search, col_type = st.columns([3, 1])
    with col_search:
        search = st.text_input("Search source, category, notes or amount")
    with col_type:
        type_label = st.selectbox("Type", ["All", "Income", "Expense"])
    type_filter = {"All": "all", "Income": config.CREDIT, "Expense": config.DEBIT}[type_label]

    filtered = filter_transactions(store.transactions, search, type_filter)
    balances = running_balances(filtered)

    k1, k2, k3 = st.columns(3)
    k1.metric("Income", format_rupee(sum(t.amount for t in filtered if t.is_credit)))
    k2.metric("Expenses", format_rupee(sum(t.amount for t in filtered if t.is_debit)))
    k3.metric("Transactions", len(filtered))

    if filtered:
        total_pages = paginate(filtered, 1, config.ITEMS_PER_PAGE).total_pages
        page_no = st.number_input("Page", min_value=1, max_value=max(total_pages, 1), value=1, step=1)
        page = paginate(list(zip(filtered, balances)), int(page_no), config.ITEMS_PER_PAGE)

        rows = [
            {
                "Date": format_date(t.date),
                "Type": "Income" if t.is_credit else "Expense",
                "Category / Source": t.label,
                "Amount": ("+" if t.is_credit else "-") + format_rupee(t.amount),
                "Balance": format_rupee(bal),
                "Notes": t.notes,
            }
            for t, bal in page.items
        ]
        st.table(pd.DataFrame(rows))
        st.caption(f"Showing {page.start + 1}-{page.end} of {len(filtered)} transactions"
                   + (f" • Total: {len(store.transactions)}" if len(filtered) != len(store.transactions) else ""))

        st.download_button(
            "⬇️ Download CSV",
            export_csv(filtered),
            file_name=f"passbook_{store.today().isoformat()}.csv",
            mime="text/csv",
        )
    else:
        st.info("No transactions match your search")

elif menu == "🎯 Goals":
    st.title("🎯 My Goals")

    summary = store.goal_summary()
    savings = store.monthly_savings()
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Goals", summary.total_goals, f"{summary.completed_goals} completed")
    c2.metric("Target", format_rupee(summary.total_target))
    c3.metric("Saved", format_rupee(summary.total_current), f"{summary.percent:.1f}% of target")
    c4.metric("Avg Monthly Savings", format_rupee(savings))

    with st.expander("➕ Create New Goal"):
        errors = st.session_state.get("goal_errors", {})
        with st.form("goal_form"):
            name = st.text_input("Goal Name*")
            show_field_error(errors, "name")
            description = st.text_input("Description")
            target_amount = st.text_input("Target Amount (₹)*")
            show_field_error(errors, "target_amount")
            current_amount = st.text_input("Already Saved (₹)", value="0")
            show_field_error(errors, "current_amount")
            category = st.selectbox("Category", config.GOAL_CATEGORIES)
            has_deadline = st.checkbox("Set a target date")
            target_date = st.date_input("Target Date", value=store.today())
            submitted = st.form_submit_button("Create Goal")

        if submitted:
            result = validate_goal(name, target_amount, current_amount, category, description,
                                   target_date if has_deadline else None)
            st.session_state.goal_errors = field_errors(result)
            if result.is_right():
                store.add_goal(**result.get_or_else({}))
            st.rerun()

    if not store.goals:
        st.info("No goals yet. Create your first goal!")

    for goal in store.goals:
        progress = store.goal_progress(goal.id)
        with st.container(border=True):
            head, status = st.columns([3, 1])
            head.subheader(goal.name)
            head.caption(f"{goal.category}" + (f" • {goal.description}" if goal.description else ""))
            status.markdown(f"**{progress.status}**")
            if progress.time_left:
                status.caption(f"⏳ {progress.time_left}")

            st.progress(progress.percent / 100)
            st.write(f"{format_rupee(goal.current_amount)} of {format_rupee(goal.target_amount)} "
                     f"({progress.percent:.1f}%)")
            if not goal.completed and progress.days_to_achieve > 0:
                st.caption(f"At current savings: about {progress.days_to_achieve} days to go")

            col_inv, col_edit, col_del = st.columns(3)
            with col_inv:
                with st.form(f"invest_{goal.id}", clear_on_submit=True):
                    inv_amount = st.text_input("Invest (₹)", key=f"inv_amount_{goal.id}")
                    inv_notes = st.text_input("Notes", key=f"inv_notes_{goal.id}")
                    if st.form_submit_button("Add Investment"):
                        result = validate_investment(inv_amount, inv_notes)
                        if result.is_left():
                            st.error(field_errors(result)["amount"])
                        else:
                            data = result.get_or_else({})
                            try:
                                store.add_investment_to_goal(goal.id, data["amount"], notes=data["notes"])
                            except GoalNotFoundError:
                                st.error("This goal no longer exists")
                            else:
                                collect_alerts()
                                st.rerun()
            with col_edit:
                with st.form(f"edit_{goal.id}"):
                    new_name = st.text_input("Name", value=goal.name, key=f"name_{goal.id}")
                    new_description = st.text_input("Description", value=goal.description,
                                                    key=f"desc_{goal.id}")
                    categories = config.GOAL_CATEGORIES
                    new_category = st.selectbox(
                        "Category", categories,
                        index=categories.index(goal.category) if goal.category in categories else len(categories) - 1,
                        key=f"cat_{goal.id}",
                    )
                    new_target = st.number_input("Target", value=float(goal.target_amount), min_value=0.0,
                                                 key=f"target_{goal.id}")
                    new_current = st.number_input("Saved", value=float(goal.current_amount), min_value=0.0,
                                                  key=f"current_{goal.id}")
                    keep_deadline = st.checkbox("Target date", value=goal.target_date is not None,
                                                key=f"has_date_{goal.id}")
                    new_date = st.date_input("Date", value=goal.target_date or store.today(),
                                             key=f"date_{goal.id}")
                    if st.form_submit_button("Save Changes"):
                        result = validate_goal(new_name, new_target, new_current, new_category,
                                               new_description, new_date if keep_deadline else None)
                        if result.is_left():
                            for message in field_errors(result).values():
                                st.error(message)
                        else:
                            store.update_goal(goal.id, **result.get_or_else({}))
                            st.rerun()
            with col_del:
                if st.button("🗑 Delete Goal", key=f"del_{goal.id}"):
                    store.delete_goal(goal.id)
                    st.rerun()

            if goal.investments:
                st.table(pd.DataFrame([
                    {"Date": format_date(i.date), "Amount": format_rupee(i.amount), "Notes": i.notes}
                    for i in goal.investments
                ]))

elif menu == "⚙️ Settings":
    st.title("⚙️ Settings")

    dark = st.toggle("Dark mode", value=st.session_state.dark_mode)
    if dark != st.session_state.dark_mode:
        st.session_state.dark_mode = dark
        st.rerun()

    st.divider()
    st.subheader("Demo data")
    st.caption("Data lives only for this session. Resetting restores the demo seed.")
    if st.button("🔄 Reset to demo data"):
        transactions, goals = load_seed(config.SEED_PATH, today=store.today())
        store.reset(transactions, goals)
        st.session_state.alerts = []
        st.session_state.event_history = []
        st.rerun()

    st.subheader("📜 Event History")
    if st.session_state.event_history:
        st.dataframe(pd.DataFrame(st.session_state.event_history), use_container_width=True)
    else:
        st.info("No events yet.")

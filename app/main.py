"""
Streamlit Frontend for TargetLock

The screen the worker keeps open on the phone during the shift.

PAGES:
1. Harian   - today's counters, strict target, surplus/deficit, warnings
2. Kalender - month heat-map; tap a day to edit it
3. Evaluasi - month projection, take-home pay, target and backups

The UI holds no numbers of its own: every figure comes from the tracker,
which recomputes it from the current state.
"""

from datetime import date

import streamlit as st

from targetlock.config import get_settings, validate_all_settings
from targetlock.evaluation import (
    MONTH_NAMES,
    DayStatus,
    format_money_compact,
    format_rupiah,
    report_filename,
)
from targetlock.models.catalog import DISPLAY_ORDER
from targetlock.services.storage import BackupFormatError, backup_filename
from targetlock.tracker import TargetTracker, create_tracker


st.set_page_config(
    page_title="TargetLock",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .warning-box {
        padding: 16px;
        background-color: #3b0d0d;
        border-top: 4px solid #facc15;
        border-bottom: 4px solid #facc15;
        color: #ffffff;
        font-family: monospace;
        font-weight: bold;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


STATUS_ICONS = {
    DayStatus.OK: "🟩",
    DayStatus.MIN: "🟥",
    DayStatus.OFF: "⬛",
    DayStatus.EMPTY: "⬜",
}


@st.cache_resource
def get_tracker() -> TargetTracker:
    """Get or create the tracker (cached for the server process)."""
    return create_tracker()


def main():
    """Main application entry point."""
    tracker = get_tracker()

    if "active_day" not in st.session_state:
        st.session_state.active_day = None

    # Calendar clicks request a page switch before the radio is drawn
    if "goto" in st.session_state:
        st.session_state.page = st.session_state.pop("goto")

    st.sidebar.title("🎯 TargetLock")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["Harian", "Kalender", "Evaluasi"],
        index=0,
        key="page",
    )

    app_settings = get_settings().app
    if app_settings.debug_mode:
        st.sidebar.markdown("---")
        st.sidebar.caption(f"Environment: {app_settings.app_environment}")
        st.sidebar.caption(f"Data file: {get_settings().tracker.data_path}")

    if page == "Harian":
        render_daily_page(tracker)
    elif page == "Kalender":
        render_calendar_page(tracker)
    elif page == "Evaluasi":
        render_evaluation_page(tracker)


def render_daily_page(tracker: TargetTracker):
    """Render the dashboard for today or the day picked on the calendar."""
    today = tracker.today_key()
    day = st.session_state.active_day or today

    if day != today:
        col1, col2 = st.columns([3, 1])
        col1.warning(f"⚠️ Editing: {day}")
        if col2.button("Back to today"):
            st.session_state.active_day = None
            st.rerun()

    snapshot = tracker.dashboard(day)
    record = snapshot.record

    col1, col2, col3 = st.columns(3)
    col1.metric("Omset hari ini", format_rupiah(snapshot.stats.net))
    col2.metric("Target hari ini", format_rupiah(snapshot.daily_target))
    col3.metric(
        "SURPLUS" if snapshot.surplus >= 0 else "DEFISIT",
        format_rupiah(snapshot.surplus),
    )
    if snapshot.surplus < 0:
        st.caption(f"Target besok naik menjadi {format_rupiah(snapshot.tomorrow_target)}")

    col1, col2, col3 = st.columns(3)
    col1.metric("Uang makan", format_rupiah(snapshot.stats.meal_allowance))
    col2.metric("Kasbon", format_rupiah(-snapshot.stats.kasbon))
    col3.metric("Gaji cair", format_rupiah(snapshot.take_home))

    if snapshot.warnings:
        lines = "".join(f"<li>{w.message}</li>" for w in snapshot.warnings)
        st.markdown(
            f'<div class="warning-box">SYSTEM WARNING:<ul>{lines}</ul></div>',
            unsafe_allow_html=True,
        )

    st.markdown("---")
    label = "YA (ON)" if record.is_work_day else "TIDAK (LIBUR)"
    if st.button(f"Masuk kerja: {label}"):
        tracker.toggle_work_day(day)
        st.rerun()

    if not record.is_work_day:
        return

    kasbon = st.number_input("Kasbon hari ini", min_value=0, step=10_000, value=record.kasbon)
    if kasbon != record.kasbon:
        tracker.set_kasbon(day, int(kasbon))
        st.rerun()

    for category in DISPLAY_ORDER:
        items = tracker.catalog.by_category(category)
        if not items:
            continue
        st.subheader(category.value.title())
        columns = st.columns(len(items))
        for column, item in zip(columns, items):
            with column:
                st.markdown(f"**{item.label}**  \n{format_rupiah(item.unit_price)}")
                st.markdown(f'<div class="big-number">{record.count_of(item.id)}</div>', unsafe_allow_html=True)
                minus, plus = st.columns(2)
                if minus.button("−", key=f"dec_{item.id}"):
                    tracker.adjust_item(day, item.id, -1)
                    st.rerun()
                if plus.button("+", key=f"inc_{item.id}"):
                    tracker.adjust_item(day, item.id, 1)
                    st.rerun()

    notes = st.text_area("Catatan", value=record.notes or "")
    if notes != (record.notes or ""):
        tracker.set_notes(day, notes)


def render_calendar_page(tracker: TargetTracker):
    """Render the month heat-map."""
    calendar = tracker.calendar()
    st.title(calendar.title)

    header = st.columns(7)
    for column, name in zip(header, ["M", "S", "S", "R", "K", "J", "S"]):
        column.markdown(f"**{name}**")

    slots = [None] * calendar.leading_blanks + list(calendar.cells)
    for week_start in range(0, len(slots), 7):
        columns = st.columns(7)
        for column, cell in zip(columns, slots[week_start:week_start + 7]):
            if cell is None:
                continue
            amount = format_money_compact(cell.net) if cell.has_record else "-"
            if column.button(f"{cell.day} {STATUS_ICONS[cell.status]} {amount}", key=f"cal_{cell.key}"):
                st.session_state.active_day = cell.key
                st.session_state.goto = "Harian"
                st.rerun()

    st.caption("🟩 OK  🟥 MIN  ⬛ LIBUR  ⬜ belum diisi")


def render_evaluation_page(tracker: TargetTracker):
    """Render the month evaluation, target editor, report and backups."""
    evaluation = tracker.evaluation()
    projection = evaluation.projection

    st.title("Evaluasi")
    st.markdown(f"**{evaluation.message}**")

    col1, col2, col3 = st.columns(3)
    col1.metric("Omset s/d hari ini", format_rupiah(projection.total_net_income), f"{evaluation.percent_achieved:.1f}%")
    col2.metric("Proyeksi akhir bulan", format_rupiah(int(projection.projected_total)), f"{evaluation.projected_percent:.1f}%")
    col3.metric("Sisa hari kerja", projection.work_days_remaining)

    col1, col2, col3 = st.columns(3)
    col1.metric("Uang makan", format_rupiah(evaluation.total_meal_allowance))
    col2.metric("Total kasbon", format_rupiah(-evaluation.total_kasbon))
    col3.metric("Gaji cair", format_rupiah(evaluation.take_home))

    st.markdown("---")
    target = st.number_input(
        "Target bulanan",
        min_value=1,
        step=100_000,
        value=tracker.state.monthly_target,
    )
    if st.button("Simpan target") and target != tracker.state.monthly_target:
        tracker.set_monthly_target(int(target))
        st.rerun()

    st.markdown("---")
    month = st.selectbox(
        "Laporan bulan",
        options=list(range(12)),
        index=tracker.state.month,
        format_func=lambda m: MONTH_NAMES[m],
    )
    report = tracker.report(month)
    st.subheader(f"Laporan {report.period}")
    st.dataframe(
        [
            {
                "TGL": row.day,
                "HARI": row.weekday,
                "STATUS": row.status,
                "QTY": row.pairs,
                "OMSET": row.income,
                "MAKAN": row.meal,
                "KASBON": row.kasbon,
            }
            for row in report.rows
        ],
        use_container_width=True,
    )
    st.caption(
        f"Total omset {format_rupiah(report.totals.income)} · "
        f"gaji cair {format_rupiah(report.totals.take_home)} · "
        f"file: {report_filename(report)}"
    )

    st.markdown("---")
    st.subheader("Backup")
    st.download_button(
        "⬇️ Export backup",
        data=tracker.backup_document(),
        file_name=backup_filename(date.fromisoformat(tracker.today_key())),
        mime="application/json",
        on_click=tracker.export_backup,
    )
    uploaded = st.file_uploader("Import backup", type=["json"])
    if uploaded is not None:
        st.warning("Importing replaces every record on this device.")
        if st.button("Import", type="primary"):
            try:
                tracker.import_backup(uploaded.read())
                st.success("Backup restored.")
            except BackupFormatError as e:
                st.error(f"Invalid backup file: {e}")

    st.markdown("---")
    render_settings_status()


def render_settings_status():
    """Show whether the configuration loaded cleanly."""
    st.subheader("Konfigurasi")

    status = validate_all_settings()
    for name, label in [("tracker", "Target & data file"), ("app", "Aplikasi")]:
        if status.get(name):
            st.success(f"✅ {label}")
        else:
            st.error(f"❌ {label}: {status.get(f'{name}_error', 'invalid')}")


if __name__ == "__main__":
    main()

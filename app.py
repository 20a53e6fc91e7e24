"""Attribute Tracker (Streamlit)

Principles:
- UI only renders + triggers.
- Core domain and engine are pure Python modules.
- Every state change goes through the session's TrackerController; the
  persistence bridge saves it as a subscriber.

Run: streamlit run app.py
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import List

import streamlit as st

from core.catalog import ACTIONS, ATTRIBUTE_LABELS, DAILY_TASKS, Action, format_effect_lines
from core.state import ActionEntry, LogEntry, attributes_to_dict

from engine.config import TrackerConfig
from engine.controller import TrackerController
from engine.export import dumps_export, loads_export, make_export
from storage.backends.local import JsonFileStore
from storage.bridge import PersistenceBridge


APP_TITLE = "Attribute Tracker"
APP_SUBTITLE = "Pick what you did; your attributes follow. Delete a log line to undo it."
APP_VERSION = "1.0.0"

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("attribute_tracker.app")

st.set_page_config(page_title=APP_TITLE, page_icon="📈", layout="centered")

CSS = """
<style>
.block-container {padding-top: 2.4rem; padding-bottom: 2rem;}
.card {
  border: 1px solid rgba(128,128,128,0.20);
  border-radius: 14px;
  padding: 12px 16px;
}
.logline {font-size: 14px; padding: 2px 0;}
.logline .time {opacity: .65; font-variant-numeric: tabular-nums;}
.logline .task {opacity: .85; font-style: italic;}
.small {font-size: 13px; opacity:.75;}
hr.soft {border: none; border-top: 1px solid rgba(128,128,128,0.20); margin: 1rem 0;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)


# =========================
# Helpers
# =========================


def _config() -> TrackerConfig:
    return TrackerConfig()


def _action_help(action: Action) -> str:
    lines = format_effect_lines(action.effects)
    if action.once_only:
        lines.append("_once per session_")
    return "  \n".join(lines)


def _log_line(entry: LogEntry) -> str:
    if isinstance(entry, ActionEntry):
        return f"<span class='time'>[{entry.time}]</span> {entry.action}"
    return f"<span class='time'>[{entry.time}]</span> <span class='task'>✔ {entry.task}</span>"


# =========================
# Session State
# =========================


def _ensure_state() -> None:
    ss = st.session_state
    if "controller" not in ss:
        cfg = _config()
        bridge = PersistenceBridge.from_config(JsonFileStore.from_config(cfg), cfg)
        controller = TrackerController(cfg)
        controller.attach(bridge)
        ss.controller = controller
        ss.bridge = bridge
    if "confirm_reset" not in ss:
        ss.confirm_reset = False
    if "last_import" not in ss:
        ss.last_import = ""


def _controller() -> TrackerController:
    return st.session_state.controller


# --- Callbacks ---


def _on_action(name: str) -> None:
    _controller().apply_action(name)


def _on_task(name: str) -> None:
    _controller().toggle_task(name)


def _on_delete(index: int) -> None:
    _controller().delete_log_entry(index)


def _on_reset_request() -> None:
    st.session_state.confirm_reset = True


def _on_reset_cancel() -> None:
    st.session_state.confirm_reset = False


def _on_reset_confirm() -> None:
    _controller().reset_all()
    st.session_state.confirm_reset = False


# =========================
# UI sections
# =========================


def section_attributes() -> None:
    ctl = _controller()
    cfg = ctl.config
    attrs = attributes_to_dict(ctl.state.attributes)

    head, btn = st.columns([4, 1])
    head.subheader("Attributes")
    btn.button("Clear cache", on_click=_on_reset_request, type="secondary", use_container_width=True)

    if st.session_state.confirm_reset:
        st.warning("This erases all attributes, the log and today's checklist. Continue?")
        c1, c2 = st.columns(2)
        c1.button("Yes, clear everything", on_click=_on_reset_confirm, type="primary", use_container_width=True)
        c2.button("Cancel", on_click=_on_reset_cancel, use_container_width=True)

    for key, label in ATTRIBUTE_LABELS.items():
        value = int(attrs.get(key, 0))
        ratio = min(value / float(cfg.bar_max), 1.0) if cfg.bar_max > 0 else 0.0
        st.progress(ratio, text=f"{label}: {value}")


def section_actions() -> None:
    ctl = _controller()
    st.subheader("Choose an action")

    cols = st.columns(3)
    for i, action in enumerate(ACTIONS):
        with cols[i % 3]:
            st.button(
                action.name,
                key=f"act_{i}",
                help=_action_help(action),
                disabled=not ctl.can_apply(action),
                type="primary" if not action.negative else "secondary",
                on_click=_on_action,
                args=(action.name,),
                use_container_width=True,
            )


def section_tasks() -> None:
    ctl = _controller()
    if not ctl.config.daily_tasks_enabled:
        return
    st.subheader("Daily checklist")
    done = set(ctl.state.tasks_completed)
    for i, task in enumerate(DAILY_TASKS):
        st.checkbox(
            task,
            value=task in done,
            key=f"task_{i}_{task in done}",
            on_change=_on_task,
            args=(task,),
        )


def section_log() -> None:
    ctl = _controller()
    logs: List[LogEntry] = list(ctl.state.logs)
    st.subheader("Log")
    if not logs:
        st.info("Nothing logged yet.")
        return

    box = st.container(height=320)
    with box:
        for idx, entry in enumerate(logs):
            line, rm = st.columns([8, 1])
            line.markdown(f"<div class='logline'>{_log_line(entry)}</div>", unsafe_allow_html=True)
            rm.button("✕", key=f"del_{len(logs)}_{idx}", help="Delete and undo", on_click=_on_delete, args=(idx,))


# =========================
# Sidebar
# =========================


def export_import_controls() -> None:
    ss = st.session_state
    ctl = _controller()

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Export / Import")

    payload = make_export(state=ctl.state, config=ctl.config, exported_at=datetime.now().isoformat(timespec="seconds"))
    st.sidebar.download_button(
        "Download log",
        data=dumps_export(payload).encode("utf-8"),
        file_name=f"{ctl.config.storage_key}.json",
        mime="application/json",
    )

    up = st.sidebar.file_uploader("Load an export", type=["json"], accept_multiple_files=False)
    if up is None:
        return
    upload_id = str(getattr(up, "file_id", "") or up.name)
    if upload_id == ss.last_import:
        return
    try:
        state = loads_export(up.read().decode("utf-8"))
    except (UnicodeDecodeError, ValueError, OverflowError) as e:
        st.sidebar.error(f"Import failed: {e}")
        return
    ss.last_import = upload_id
    ctl.restore(state)
    logger.info("Imported %d log entries from %s", len(state.logs), up.name)
    st.sidebar.success("Export loaded.")
    st.rerun()


def sidebar() -> None:
    ss = st.session_state

    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION}")

    stt = ss.bridge.status()
    if stt.ok:
        st.sidebar.success(f"Saving to {stt.backend}: {stt.location}")
    else:
        st.sidebar.error("Storage not writable")
        st.sidebar.caption(stt.error)

    export_import_controls()

    with st.sidebar.expander("Debug"):
        st.json({"config": asdict(_controller().config), "status": asdict(stt)})


# =========================
# Main
# =========================


def main() -> None:
    _ensure_state()
    sidebar()

    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    try:
        section_attributes()
        st.markdown("<hr class='soft'/>", unsafe_allow_html=True)
        section_actions()
        st.markdown("<hr class='soft'/>", unsafe_allow_html=True)
        section_tasks()
        section_log()
    except Exception as e:
        logger.exception("Rendering failed")
        st.error(f"Something went wrong: {type(e).__name__}: {e}")
        st.info("Your data is saved after every change. Reload the page to retry.")


if __name__ == "__main__":
    main()

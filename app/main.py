"""
Main Streamlit application for the Project Creation Wizard.
Renders the three wizard steps with the Delete and Save controls.
"""

import streamlit as st
from pathlib import Path
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from app.session import clear_wizard_session_state, get_wizard, run_async
from app.wizardry import STEP_VIEWS
from common import constants, logger as wizard_logger, utils


def get_page_config():
    """Get the Streamlit page configuration."""
    return {
        "page_title": "Create Project",
        "page_icon": "🗂️",
        "layout": "wide",
        "initial_sidebar_state": "collapsed"
    }


def show_step_tabs(wizard):
    """
    Display the step tabs.

    A disabled tab is shown greyed out with a warning but stays clickable.
    """
    columns = st.columns(len(constants.WIZARD_STEPS))
    for column, tab in zip(columns, wizard.tabs()):
        label = f"⚠️ {tab.label}" if tab.disabled else tab.label
        button_type = "primary" if tab.active else "secondary"
        if column.button(label, key=f"tab_{tab.step}", type=button_type, use_container_width=True):
            wizard.select_step(tab.step)
            st.rerun()


def show_controls(wizard):
    """Display the Delete and Save controls."""
    commit_control = wizard.commit_control()
    cancel_control = wizard.cancel_control()

    col_title, col_delete, col_save = st.columns([6, 1, 1])
    col_title.title("Create Project")

    if col_delete.button("Delete", key="delete_project", disabled=cancel_control.waiting,
                         use_container_width=True):
        with st.spinner("Deleting draft..."):
            run_async(wizard.cancel())
        st.rerun()

    save_label = "Saving..." if commit_control.waiting else "Save"
    if col_save.button(save_label, key="save_project", type="primary",
                       disabled=commit_control.disabled or commit_control.waiting,
                       use_container_width=True):
        with st.spinner("Saving project..."):
            try:
                run_async(wizard.commit())
            except Exception as e:
                is_dev_mode = st.session_state.get("developer_mode_active", False)
                utils.display_page_error(e, wizard_id=wizard.wizard_id, dev_mode=is_dev_mode)
                return
        st.rerun()


def show_navigation_result():
    """Display where the wizard navigated after it ended."""
    navigator = st.session_state['navigator']
    st.title("Create Project")
    if navigator.location == constants.PROJECTS_ROUTE:
        st.info("The draft project was discarded.")
    else:
        st.success("Project created.")
    st.write(f"Navigated to `{navigator.location}`")

    if st.button("Create another project", type="primary"):
        clear_wizard_session_state()
        st.rerun()


def main():
    """Main application entry point."""
    st.set_page_config(**get_page_config())
    wizard_logger.setup_root_logger()

    st.session_state['offline_mode'] = st.sidebar.toggle(
        "Offline mode",
        value=st.session_state.get('offline_mode', False),
        help="Keep projects in memory instead of calling the project service."
    )
    st.session_state["developer_mode_active"] = st.sidebar.toggle(
        "🔧 Developer Mode",
        value=st.session_state.get("developer_mode_active", False),
        help="Show detailed debug information and stack traces on error pages."
    )

    navigator = st.session_state.get('navigator')
    if navigator is not None and navigator.events:
        show_navigation_result()
        return

    wizard = get_wizard()
    if not wizard.state.has_draft:
        st.warning("The draft project could not be created. Check the project service connection.")

    show_controls(wizard)
    show_step_tabs(wizard)
    st.divider()

    # Only the active step is mounted; the others keep their data in the wizard
    STEP_VIEWS[wizard.step.value].run(wizard)


if __name__ == "__main__":
    main()

"""
Session helpers for the Streamlit wizard.
Keeps one wizard instance per browser session and runs its coroutines.
"""

import asyncio
from typing import Any, Awaitable

import streamlit as st

from api.client import RestDraftClient
from api.memory_client import InMemoryDraftClient
from wizard import CreateProjectWizard, HistoryNavigator


def run_async(coro: Awaitable[Any]) -> Any:
    """Run one wizard operation to completion from a Streamlit callback."""
    return asyncio.run(coro)


def get_wizard() -> CreateProjectWizard:
    """
    Return the session's wizard, creating and opening it on first use.

    Offline mode keeps projects in memory instead of calling the project service.
    """
    if 'wizard' not in st.session_state:
        if st.session_state.get('offline_mode', False):
            client = InMemoryDraftClient()
        else:
            client = RestDraftClient()

        navigator = HistoryNavigator()
        wizard = CreateProjectWizard(
            client,
            navigator,
            on_close=lambda: st.session_state.update({'wizard_closed': True}),
        )
        st.session_state['wizard'] = wizard
        st.session_state['navigator'] = navigator
        st.session_state['wizard_closed'] = False

        with st.spinner("Creating draft project..."):
            run_async(wizard.open())

    return st.session_state['wizard']


def clear_wizard_session_state() -> None:
    """Forget the current wizard so the next run starts a new one."""
    for key in [
        'wizard',
        'navigator',
        'wizard_closed',
        'project_name',
        'project_description',
        'label_config',
        'csv_handling',
        'uploaded_files_seen',
    ]:
        st.session_state.pop(key, None)

# app/wizardry/step1_name.py
import streamlit as st

from app.session import run_async


def _on_name_change(wizard):
    # Streamlit has no blur event; a committed edit of the field stands in for it
    wizard.set_name(st.session_state['project_name'])
    run_async(wizard.save_name())


def _on_description_change(wizard):
    wizard.set_description(st.session_state['project_description'])


def run(wizard):
    # Widget state is dropped while the step is unmounted; the wizard keeps the value
    st.session_state["project_name"] = wizard.state.name
    st.session_state["project_description"] = wizard.state.description

    st.text_input(
        "Project Name",
        key="project_name",
        on_change=_on_name_change,
        args=(wizard,),
    )
    if wizard.editor.name_error:
        st.error(wizard.editor.name_error)

    st.text_area(
        "Description",
        key="project_description",
        placeholder="Optional description of your project",
        height=120,
        on_change=_on_description_change,
        args=(wizard,),
    )

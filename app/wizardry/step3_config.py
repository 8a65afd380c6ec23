# app/wizardry/step3_config.py
import streamlit as st


def _on_config_change(wizard):
    wizard.set_label_config(st.session_state['label_config'])


def run(wizard):
    st.session_state["label_config"] = wizard.state.label_config

    st.text_area(
        "Labeling interface",
        key="label_config",
        height=300,
        on_change=_on_config_change,
        args=(wizard,),
    )

    if wizard.columns:
        st.write("Data columns you can reference as variables:")
        st.code(" ".join(f"${column}" for column in wizard.columns))

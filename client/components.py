# client/components.py
import streamlit as st
import pandas as pd

# Flat columns worth showing in a table; nested fields stay in the JSON view
SUMMARY_COLUMNS = [
    "firstname", "lastname", "current_job_title", "current_company",
    "years_of_experience", "languages", "companies", "schools", "location", "linkedin_url",
]

def show_table(rows, caption: str | None = None):
    """Render a list[dict] as a dataframe; otherwise show JSON."""
    if caption:
        st.caption(caption)
    if isinstance(rows, list):
        if rows and isinstance(rows[0], dict):
            st.dataframe(pd.DataFrame(rows))
        else:
            st.write(rows)
    else:
        st.write(rows)

def show_profiles(items, caption: str | None = None):
    """Summary table of normalized profiles."""
    rows = [{k: it.get(k) for k in SUMMARY_COLUMNS} for it in items or []]
    show_table(rows, caption=caption)

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)

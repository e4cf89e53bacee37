# client/pages/2_Browse.py
import streamlit as st
import pandas as pd
import api as API
from components import show_json, show_profiles, show_table

st.title("📚 Browse")

tab1, tab2, tab3 = st.tabs(["Last batch", "Profile detail", "Server sample"])

items = st.session_state.get("processed_items") or []

with tab1:
    st.subheader("Last processed batch")
    if not items:
        st.info("Nothing processed yet — use the **Process** page first.")
    else:
        show_profiles(items, caption=f"{len(items)} normalized profile(s)")
        years = pd.Series([it.get("years_of_experience") for it in items])
        c1, c2, c3 = st.columns(3)
        c1.metric("Profiles", len(items))
        c2.metric("Unknown seniority (99)", int((years == 99).sum()))
        known = years[years != 99]
        c3.metric("Median years", f"{known.median():.0f}" if not known.empty else "—")

with tab2:
    st.subheader("One profile")
    if items:
        labels = [f"{i}: {it.get('firstname')} {it.get('lastname')} ({it.get('urn')})" for i, it in enumerate(items)]
        idx = st.selectbox("Profile", range(len(items)), format_func=lambda i: labels[i], key="browse_pick")
        picked = items[idx]
        st.markdown(f"**{picked.get('headline') or ''}** — {picked.get('location') or ''}")
        for group in picked.get("experiences") or []:
            st.markdown(f"**{group['company']}**")
            show_table(group["jobs"])
        show_table(picked.get("educations") or [], caption="Educations")
        if st.checkbox("Show raw input", key="browse_raw"):
            show_json(picked.get("profil_details"))
    else:
        st.info("Nothing processed yet.")

with tab3:
    st.subheader("Bundled sample (`/api/test`)")
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Run sample", key="btn_sample"):
            try:
                res = API.sample_run()
                st.success(f"{res['message']} ({res['processed']} profile(s))")
                show_profiles(res.get("items"))
            except Exception as e:
                st.error(e)
    with c2:
        if st.button("Which worker answered?", key="btn_debug"):
            try:
                show_json(API.debug())
            except Exception as e:
                st.error(e)

# client/streamlit_app.py
import os
import requests
import streamlit as st

st.set_page_config(page_title="Profile Processor Client", layout="wide")
st.title("🧰 Profile Processor Client")

st.markdown("""
This is the home page.

Use the **sidebar Pages** to open:
- **📥 Process** — Generate synthetic LinkedIn-style profiles or paste raw JSON and POST to `/api/process-profiles`. Shows batch counts and per-record errors.
- **📚 Browse** — Look at the last processed batch as a table, drill into one normalized profile, or run the server's bundled sample (`/api/test`).
""")

with st.sidebar:
    st.header("Settings")
    api_url = os.getenv("API_BASE_URL", "http://localhost:3000")
    st.text_input("API Base URL (from env)", value=api_url, disabled=True)
    if st.button("Health check"):
        try:
            r = requests.get(f"{api_url}/health", timeout=5)
            st.success(r.json())
        except Exception as e:
            st.error(f"Health check failed: {e}")

st.info("Tip: set `API_BASE_URL` in `client/.env` or export it before running `streamlit run client/streamlit_app.py`.")

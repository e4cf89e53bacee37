import streamlit as st, random, requests, json, time, io
import api as API
from gen_data import gen_profile_record
from components import show_json, show_profiles

st.title("📥 Process")

# ------------------------
# Session state
# ------------------------
if "generated_records" not in st.session_state:
    st.session_state.generated_records = []
if "processed_items" not in st.session_state:
    st.session_state.processed_items = []
if "failed_items" not in st.session_state:
    st.session_state.failed_items = []

# ------------------------
# Controls
# ------------------------
col1, col2, col3 = st.columns(3)
with col1:
    total_n = st.number_input("Total profiles", 1, 10000, 100, key="proc_total")
with col2:
    batch_size = st.number_input("Batch size", 1, 1000, 25, key="proc_batch")
with col3:
    missing_urn = st.slider("Profiles without urn (%)", 0, 100, 0, key="proc_missing")

with st.expander("Advanced options"):
    c1, c2, c3 = st.columns(3)
    with c1:
        seed = st.number_input("Random seed", 0, 999999, 0, key="proc_seed")
    with c2:
        rate = st.number_input("Throttle (profiles/sec)", 0.0, 1000.0, 0.0, 0.1, key="proc_rate")
    with c3:
        wrapped = st.checkbox('Wrap items as {"json": profile}', key="proc_wrapped")

# ------------------------
# Helpers
# ------------------------
def _chunked(seq, size):
    for i in range(0, len(seq), size):
        yield seq[i:i+size]

def _gen(n: int, missing_pct: int = 0):
    if seed:
        random.seed(int(seed))
    return [gen_profile_record(with_urn=random.random() * 100 >= missing_pct) for _ in range(n)]

def _wrap(chunk):
    return [{"json": p} for p in chunk] if wrapped else chunk

def _dl_button_from_records(records, label="⬇️ Download generated JSON", file_name="profiles.json"):
    buf = io.StringIO()
    json.dump(records, buf, indent=2, ensure_ascii=False)
    st.download_button(label, data=buf.getvalue(), file_name=file_name, mime="application/json")

# ------------------------
# Generate & Preview
# ------------------------
cA, cB, cC = st.columns(3)
with cA:
    if st.button("🎲 Generate profiles", key="btn_gen"):
        st.session_state.generated_records = _gen(total_n, missing_urn)
        st.success(f"Generated {len(st.session_state.generated_records)} profile(s).")
with cB:
    if st.button("Preview first 2 profiles", key="btn_preview"):
        if not st.session_state.generated_records:
            st.info("No generated profiles yet — click **Generate profiles** first.")
        else:
            show_json(st.session_state.generated_records[:2], caption="Preview (first 2 profiles)")
with cC:
    if st.session_state.generated_records:
        _dl_button_from_records(st.session_state.generated_records)

st.divider()

# ------------------------
# Process generated profiles
# ------------------------
if st.session_state.generated_records:
    prog = st.progress(0.0)
    eta_text = st.empty()

    if st.button("➡️ Process generated profiles", key="btn_process_gen"):
        recs = st.session_state.generated_records
        total = len(recs)
        ok_batches = fail_batches = processed = filtered_out = failed = 0
        st.session_state.processed_items = []
        st.session_state.failed_items = []

        batch_sleep = 0.0
        if rate and rate > 0:
            batch_sleep = batch_size / float(rate)

        start = time.time()
        for i, chunk in enumerate(_chunked(recs, batch_size), start=1):
            try:
                resp = API.process(_wrap(chunk))
                meta = resp.get("metadata", {})
                processed += int(meta.get("processed", 0))
                filtered_out += int(meta.get("total", 0)) - int(meta.get("filtered", 0))
                failed += int(meta.get("failed", 0))
                st.session_state.processed_items.extend(resp.get("items") or [])
                if resp.get("errors"):
                    st.session_state.failed_items.extend(resp["errors"])
                ok_batches += 1
                st.write(f"[{i}] → {meta}")
            except requests.HTTPError as e:
                fail_batches += 1
                msg = e.response.text[:400] if e.response is not None else str(e)
                st.error(f"[{i}] HTTP error: {msg}")
            except Exception as e:
                fail_batches += 1
                st.error(f"[{i}] {e}")

            # progress + ETA
            prog.progress(i / ((total + batch_size - 1) // batch_size))
            elapsed = time.time() - start
            done = min(i * batch_size, total)
            rate_now = (done / elapsed) if elapsed > 0 else 0.0
            remaining = max(total - done, 0)
            eta = (remaining / rate_now) if rate_now > 0 else 0
            eta_text.caption(f"Progress: {done}/{total} (~{rate_now:.1f} profiles/s) | ETA ~ {eta:.1f}s")

            if batch_sleep:
                time.sleep(batch_sleep)

        st.success("Done.")
        st.write(f"**Batches**: success={ok_batches} failed={fail_batches} total={ok_batches+fail_batches}")
        st.write(f"**Profiles**: processed={processed} filtered_out={filtered_out} failed={failed} total={total}")
        show_profiles(st.session_state.processed_items[:50], caption="First 50 normalized profiles")
        if st.session_state.failed_items:
            st.warning(f"{len(st.session_state.failed_items)} profile(s) could not be decoded.")
            show_json(st.session_state.failed_items[:10])

st.divider()

# ------------------------
# Raw JSON paths (manual)
# ------------------------
st.caption("Or paste/upload raw JSON and POST directly to `/api/process-profiles`")

cU, cP = st.columns(2)
with cU:
    up = st.file_uploader("Upload JSON file (object or array)", type=["json"], key="proc_upload")
    if up and st.button("POST uploaded JSON", key="btn_upload_post"):
        try:
            data = json.load(up)
            resp = API.process(data)
            st.session_state.processed_items = resp.get("items") or []
            st.success(resp.get("metadata"))
        except Exception as e:
            st.error(e)

with cP:
    payload_text = st.text_area("Paste JSON", height=180, key="proc_textarea",
                                placeholder='[{"urn":"ACoAA...","username":"jane-doe","positions":[...]}]')
    if st.button("POST pasted JSON", key="btn_paste_post"):
        try:
            data = json.loads(payload_text)
            resp = API.process(data)
            st.session_state.processed_items = resp.get("items") or []
            st.success(resp.get("metadata"))
        except Exception as e:
            st.error(e)

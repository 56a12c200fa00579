# frontend/app.py
# Run with: streamlit run frontend/app.py
import base64

import streamlit as st

from api_client import (
    ApiError,
    analyze_aura,
    generate_image,
    health,
    upload_file,
    upload_variants,
)
from images import bytes_to_data_url, image_to_data_url
from render import palette_swatches, rating_badge

PAGE_TITLE = "Aura Partner Studio"

st.set_page_config(
    page_title=PAGE_TITLE,
    layout="wide",
    initial_sidebar_state="collapsed",
)

# ---------- STYLING ----------
st.markdown(
    """
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    * {
        font-family: 'Inter', system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
    }

    [data-testid="stAppViewContainer"] {
        background:
            radial-gradient(circle at top left, #312e81 0, transparent 55%),
            radial-gradient(circle at bottom right, #0f172a 0, transparent 60%),
            #0b1020;
        color: #e5e7eb;
    }

    .section-label {
        font-size: 0.78rem;
        text-transform: uppercase;
        color: #a5b4fc;
        margin-bottom: 0.55rem;
        letter-spacing: 0.12em;
    }

    .rating-badge {
        display: inline-flex;
        align-items: baseline;
        gap: 0.2rem;
        padding: 0.2rem 0.9rem;
        background: linear-gradient(135deg, #a855f7, #ec4899);
        border-radius: 999px;
        color: #fdf4ff;
        box-shadow: 0 14px 30px rgba(168,85,247,0.35);
    }

    .rating-badge .value {
        font-size: 1.6rem;
        font-weight: 700;
    }

    .swatch {
        display: inline-block;
        font-size: 0.75rem;
        padding: 0.2rem 0.65rem;
        margin: 0 0.3rem 0.3rem 0;
        border-radius: 999px;
        border: 1px solid rgba(165,180,252,0.4);
        color: #e0e7ff;
    }

    div.stButton > button {
        border-radius: 999px;
        padding: 0.4rem 1.4rem;
        border: 1px solid rgba(168,85,247,0.6);
        background: radial-gradient(circle at top left, #c084fc, #a855f7);
        color: #1e1b4b;
        font-weight: 600;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# ---------- STATE ----------
for key in ("aura_result", "generated", "upload_result", "variants"):
    if key not in st.session_state:
        st.session_state[key] = None

# ---------- SIDEBAR ----------
with st.sidebar:
    st.markdown('<div class="section-label">Backend</div>', unsafe_allow_html=True)
    try:
        providers = health().get("providers", {})
    except ApiError as e:
        st.error(e.message)
    else:
        for name, ok in providers.items():
            st.write(("🟢 " if ok else "🔴 ") + name)

st.markdown(f"## {PAGE_TITLE}")
st.caption("Upload a selfie, read your aura, and meet a portrait of your AI partner.")

aura_tab, gen_tab, upload_tab = st.tabs(["Aura partner", "Gemini image", "Upload"])

# =========================================================
# AURA PARTNER
# =========================================================
with aura_tab:
    left, right = st.columns([1, 1])

    with left:
        st.markdown('<div class="section-label">Your selfie</div>', unsafe_allow_html=True)
        selfie = st.file_uploader(
            "Selfie",
            type=["png", "jpg", "jpeg", "webp"],
            label_visibility="collapsed",
            key="selfie",
        )
        if selfie:
            st.image(selfie, caption="Preview", use_container_width=True)

        description = st.text_area("Describe yourself in a few words", height=90)

        if st.button("Read my aura"):
            if selfie is None:
                st.warning("Upload a selfie first.")
            elif not description.strip():
                st.warning("Add a short description.")
            else:
                try:
                    with st.spinner("Reading your aura…"):
                        data_url = image_to_data_url(selfie.getvalue())
                        st.session_state.aura_result = analyze_aura(data_url, description)
                except ApiError as e:
                    st.error(e.message if not e.details else f"{e.message}: {e.details}")
                except OSError as e:
                    st.error(f"Could not read that image: {e}")

    with right:
        result = st.session_state.aura_result
        if not result:
            st.caption("No reading yet.")
        else:
            rating = result.get("rating")
            st.markdown(
                rating_badge(rating),
                unsafe_allow_html=True,
            )
            st.write(result.get("auraSummary", ""))
            if result.get("partnerPersona"):
                st.write("**Your AI partner:**", result["partnerPersona"])

            palette = result.get("colorPalette") or []
            if palette:
                st.markdown(
                    palette_swatches(palette),
                    unsafe_allow_html=True,
                )
            if result.get("guidance"):
                st.info(result["guidance"])

            if result.get("pollinationsUrl"):
                st.image(result["pollinationsUrl"], caption="Your AI partner", use_container_width=True)
            with st.expander("Portrait prompt"):
                st.write(result.get("pollinationsPrompt", ""))

# =========================================================
# GEMINI IMAGE
# =========================================================
with gen_tab:
    prompt = st.text_area("Prompt", height=90, key="gen_prompt")
    if st.button("Generate"):
        try:
            with st.spinner("Generating with Gemini…"):
                st.session_state.generated = generate_image(prompt)
        except ApiError as e:
            st.error(e.message)
            if e.details:
                st.caption(str(e.details))

    generated = st.session_state.generated
    if generated:
        st.image(
            base64.b64decode(generated["image"]),
            caption=generated.get("id", ""),
            use_container_width=True,
        )

# =========================================================
# UPLOAD
# =========================================================
with upload_tab:
    to_upload = st.file_uploader(
        "Image to upload",
        type=["png", "jpg", "jpeg", "webp", "gif"],
        key="to_upload",
    )
    if st.button("Upload to CDN"):
        if to_upload is None:
            st.warning("Choose a file first.")
        else:
            try:
                with st.spinner("Uploading…"):
                    data_url = bytes_to_data_url(to_upload.getvalue(), to_upload.type)
                    uploaded = upload_file(data_url, to_upload.name)
                    st.session_state.upload_result = uploaded
                    st.session_state.variants = upload_variants(uploaded["url"])
                st.success("Upload complete.")
            except ApiError as e:
                st.error(e.message)

    uploaded = st.session_state.upload_result
    if uploaded:
        st.write("**File id:**", uploaded.get("fileId"))
        st.image(uploaded["url"], caption="Original", width=300)

        variants = (st.session_state.variants or {}).get("variants") or {}
        if variants:
            cols = st.columns(len(variants))
            for col, (name, url) in zip(cols, variants.items()):
                with col:
                    st.image(url, caption=name.replace("_", " ").title(), use_container_width=True)

# frontend/render.py
# HTML snippets for st.markdown(..., unsafe_allow_html=True); model text is escaped.
import html
from typing import Any, Iterable


def rating_badge(rating: Any) -> str:
    value = "?" if rating is None else html.escape(str(rating))
    return f'<div class="rating-badge"><span class="value">{value}</span>/10</div>'


def palette_swatches(palette: Iterable[Any]) -> str:
    return "".join(f'<span class="swatch">{html.escape(str(c))}</span>' for c in palette)

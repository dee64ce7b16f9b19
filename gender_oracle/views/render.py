import html
from typing import Dict

from gender_oracle.apis.result import Category, InferenceResult

# category -> (background, foreground)
TEXT_BADGES: Dict[Category, tuple] = {
    Category.MALE: ("#dbeafe", "#1d4ed8"),
    Category.FEMALE: ("#fce7f3", "#be185d"),
    Category.NON_BINARY: ("#f3e8ff", "#7e22ce"),
    Category.UNKNOWN: ("#e2e8f0", "#334155"),
}

IMAGE_BADGES: Dict[Category, tuple] = {
    Category.MALE: ("#2563eb", "#ffffff"),
    Category.FEMALE: ("#db2777", "#ffffff"),
    Category.NON_BINARY: ("#9333ea", "#ffffff"),
    Category.UNKNOWN: ("#64748b", "#ffffff"),
}

TEXT_PALETTE = {
    "title": "Analysis Result",
    "score_label": "Confidence Score",
    "bar": "#4f46e5",
    "badges": TEXT_BADGES,
}

IMAGE_PALETTE = {
    "title": "Visual Detection",
    "score_label": "AI Certainty",
    "bar": "#10b981",
    "badges": IMAGE_BADGES,
}


def confidence_percent(confidence: float) -> float:
    return confidence * 100.0


def percent_label(pct: float) -> str:
    """Whole-number percentage, halves rounded up (12.5 -> "13%")."""
    return f"{int(pct + 0.5)}%"


def render_result(result: InferenceResult, palette: Dict = TEXT_PALETTE) -> str:
    """
    HTML card: category badge, confidence percentage + proportional bar,
    and the reasoning quoted verbatim.
    """
    bg, fg = palette["badges"][result.category]
    pct = confidence_percent(result.confidence)
    return (
        '<div class="oracle-result" style="padding:1.25rem;border-radius:1rem;'
        'background:#f8fafc;border:1px solid #f1f5f9;">'
        '<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:1rem;">'
        f'<span style="font-size:.8rem;font-weight:600;text-transform:uppercase;color:#94a3b8;">{palette["title"]}</span>'
        f'<span class="oracle-badge" style="padding:.25rem .75rem;border-radius:999px;font-size:.75rem;'
        f'font-weight:700;text-transform:uppercase;background:{bg};color:{fg};">'
        f'{html.escape(result.category.value)}</span>'
        '</div>'
        '<div style="display:flex;justify-content:space-between;font-size:.75rem;margin-bottom:.25rem;">'
        f'<span style="color:#64748b;">{palette["score_label"]}</span>'
        f'<span style="font-weight:700;color:#334155;">{percent_label(pct)}</span>'
        '</div>'
        '<div style="width:100%;background:#e2e8f0;height:.5rem;border-radius:999px;overflow:hidden;">'
        f'<div class="oracle-bar" style="width: {pct:.1f}%;background:{palette["bar"]};height:100%;"></div>'
        '</div>'
        f'<p style="font-size:.875rem;color:#475569;font-style:italic;margin-top:1rem;">'
        f'&quot;{html.escape(result.reasoning)}&quot;</p>'
        '</div>'
    )


def render_error(message: str) -> str:
    return (
        '<div class="oracle-error" style="padding:1rem;border-radius:.75rem;background:#fef2f2;'
        f'color:#b91c1c;border:1px solid #fee2e2;font-size:.875rem;">{html.escape(message)}</div>'
    )

"""Static page sections and styling for the Character Creator interface."""

from datetime import date

import gradio as gr

CUSTOM_CSS = """
.gradio-container {
    background: #020617;
}
.cc-header {
    border-bottom: 1px solid #1e293b;
    padding-bottom: 12px;
}
.cc-header h1 {
    text-transform: uppercase;
    font-style: italic;
    letter-spacing: -0.02em;
}
.cc-accent {
    color: #facc15;
}
.cc-badge {
    display: inline-block;
    padding: 2px 12px;
    border: 1px solid rgba(34, 197, 94, 0.2);
    border-radius: 9999px;
    background: rgba(34, 197, 94, 0.1);
    color: #4ade80;
    font-size: 10px;
    font-weight: 700;
    letter-spacing: 0.1em;
    text-transform: uppercase;
}
.cc-panel {
    border: 1px solid #1e293b;
    border-radius: 16px;
    padding: 16px;
}
.cc-transform-btn {
    text-transform: uppercase;
    letter-spacing: 0.08em;
    font-weight: 700;
}
.cc-error {
    border: 1px solid rgba(239, 68, 68, 0.2);
    border-radius: 8px;
    background: rgba(239, 68, 68, 0.1);
    color: #f87171;
    padding: 8px 12px;
}
.cc-status {
    text-align: center;
    color: #64748b;
    min-height: 320px;
}
.cc-footer {
    border-top: 1px solid #1e293b;
    text-align: center;
    color: #475569;
    font-size: 10px;
    letter-spacing: 0.1em;
    text-transform: uppercase;
}
"""


def create_header(model_id: str) -> gr.HTML:
    """Page header with title and model badge.

    Args:
        model_id: Remote model shown in the badge
    """
    return gr.HTML(
        f"""
        <div class="cc-header">
            <h1>Character <span class="cc-accent">Creator</span></h1>
            <p>GTA V RAGE ENGINE EMULATOR</p>
            <span class="cc-badge">Powered by {model_id}</span>
        </div>
        """
    )


def create_footer() -> gr.HTML:
    """Page footer with the synthetic-render disclaimer."""
    return gr.HTML(
        f"""
        <div class="cc-footer">
            <p><strong>Los Santos District</strong></p>
            <p>This tool uses Gemini AI to transform imagery. All renders are synthetic
            and intended for creative exploration.<br/>
            &copy; {date.today().year} RAGE EMULATOR CORE.</p>
        </div>
        """
    )


def section_title(number: int, title: str) -> gr.Markdown:
    """Numbered panel heading (``1 · Input Image``)."""
    return gr.Markdown(f"### {number} · {title}")

"""Pure rendering of AppState into what each UI element should show.

Nothing in here mutates state. The handlers turn the :class:`ViewModel`
into Gradio component updates.
"""

from dataclasses import dataclass, field
from typing import Literal

from .models import AppState

ResultMode = Literal["loading", "result", "empty"]

TRANSFORM_LABEL = "Execute Transformation"
LOADING_LABEL = "Simulating RAGE Engine..."

LOADING_MESSAGE = (
    "### Rendering Character...\n"
    "*Generating high-fidelity textures and full-body skeletal geometry.*"
)
EMPTY_MESSAGE = "*Character preview will appear here once rendering is complete.*"


@dataclass
class ViewModel:
    """Everything the page needs to display one state."""

    transform_enabled: bool
    transform_label: str
    error_visible: bool
    error_message: str
    result_mode: ResultMode
    result_image: str | None
    status_message: str
    history_visible: bool
    history_items: list[tuple[str, str]] = field(default_factory=list)
    download_available: bool = False


def result_mode(state: AppState) -> ResultMode:
    """Pick which of the three result pane states to show.

    A shown result takes precedence over the loading indicator, so a history
    item stays visible while a new request runs.
    """
    if state.transformed_image is not None:
        return "result"
    if state.is_loading:
        return "loading"
    return "empty"


def render(state: AppState) -> ViewModel:
    """Compute the view for ``state``."""
    mode = result_mode(state)

    if mode == "loading":
        status = LOADING_MESSAGE
    elif mode == "empty":
        status = EMPTY_MESSAGE
    else:
        status = ""

    return ViewModel(
        transform_enabled=state.can_transform,
        transform_label=LOADING_LABEL if state.is_loading else TRANSFORM_LABEL,
        error_visible=bool(state.error),
        error_message=f"⚠️ {state.error}" if state.error else "",
        result_mode=mode,
        result_image=state.transformed_image if mode == "result" else None,
        status_message=status,
        history_visible=bool(state.history),
        history_items=[(item.image_url, item.caption()) for item in state.history],
        download_available=state.transformed_image is not None,
    )

"""Data models for Character Creator UI state."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformationResult:
    """One completed transformation.

    Attributes
    ----------
    image_url : str
        Data URL of the rendered output
    timestamp : int
        Creation time in milliseconds since epoch; unique within a session
    prompt_used : str
        Instruction in effect, or the default label
    """

    image_url: str
    timestamp: int
    prompt_used: str

    def display_time(self) -> str:
        """Local wall-clock time of creation (e.g. ``14:05:09``)."""
        return datetime.fromtimestamp(self.timestamp / 1000).strftime("%H:%M:%S")

    def caption(self) -> str:
        """Caption shown under the image in the history gallery."""
        return f"{self.prompt_used} ({self.display_time()})"


@dataclass
class AppState:
    """Session state for one browser session.

    Only the controller in ``state.py`` mutates this object; the render and
    handler layers read it.

    Attributes
    ----------
    original_image : str | None
        Data URL of the selected source portrait
    transformed_image : str | None
        Data URL of the result currently shown
    is_loading : bool
        True exactly while a transformation request is outstanding
    error : str | None
        Last failure message
    history : list[TransformationResult]
        Completed transformations, newest first
    instruction : str
        Transient instruction text box value
    generation : int
        Token of the most recently started request
    """

    original_image: str | None = None
    transformed_image: str | None = None
    is_loading: bool = False
    error: str | None = None
    history: list[TransformationResult] = field(default_factory=list)
    instruction: str = ""
    generation: int = 0

    @property
    def can_transform(self) -> bool:
        """Whether the transform trigger is enabled."""
        return self.original_image is not None and not self.is_loading

    def __repr__(self) -> str:
        """String representation for debugging (omits the image payloads)."""
        return (
            f"AppState(has_source={self.original_image is not None}, "
            f"has_result={self.transformed_image is not None}, "
            f"loading={self.is_loading}, error={self.error!r}, "
            f"history={len(self.history)})"
        )

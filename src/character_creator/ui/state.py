"""State management for the Character Creator UI.

This module holds the controller that owns a session's :class:`AppState`.
Every change to the state goes through one of its named transitions; the
Gradio handlers never assign state fields themselves.

Transitions
-----------
========================  ==========================  ===================================
Transition                Precondition                Effect
========================  ==========================  ===================================
select_image              none                        new source, result and error cleared,
                                                      outstanding request superseded
report_error              none                        error set (local failures)
set_instruction           none                        transient instruction updated
start_transformation      source present, idle        loading, error cleared, new token
complete_transformation   token current, loading      result shown, history prepended
fail_transformation       token current, loading      loading cleared, error set
select_history_item       index in history            past result shown
========================  ==========================  ===================================

Each started request carries a token (the generation counter). A completion
whose token is no longer current is dropped, so a late reply can never
overwrite the state of a newer request.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from character_creator.core.image_source import ImageSourceError, read_image_as_data_url
from character_creator.core.prompts import DEFAULT_PROMPT_LABEL
from character_creator.core.transform_client import TransformationError

from .models import AppState, TransformationResult

logger = logging.getLogger(__name__)


class TransformationRejected(Exception):
    """Raised when a transformation is started while it is not allowed."""

    pass


class Transformer(Protocol):
    """Anything that can turn a source image into a transformed image."""

    async def transform(self, source_image: str, instruction: str | None = None) -> str: ...


@dataclass(frozen=True)
class PendingTransformation:
    """Snapshot of the inputs of an outstanding request."""

    token: int
    source_image: str
    instruction: str


def _now_ms() -> int:
    return int(time.time() * 1000)


class TransformationController:
    """Owns one session's AppState and exposes its transitions.

    Args:
        default_prompt_label: History label used when the instruction is blank
        clock: Returns the current time in milliseconds since epoch
    """

    def __init__(
        self,
        default_prompt_label: str = DEFAULT_PROMPT_LABEL,
        clock: Callable[[], int] = _now_ms,
    ):
        self.state = AppState()
        self.default_prompt_label = default_prompt_label
        self._clock = clock

        # Download export of this session (written by the UI handlers)
        self.export_dir: Path | None = None
        self.exported_image: str | None = None

    def __repr__(self) -> str:
        return f"TransformationController({self.state!r})"

    # -- Source image ---------------------------------------------------------

    def select_image(self, data_url: str) -> None:
        """Use a newly read image as the source portrait.

        An outstanding request is superseded: its token stops being current,
        so its result is dropped when it arrives.
        """
        if self.state.is_loading:
            logger.info(f"Transformation #{self.state.generation} superseded by new source image")
            self.state.generation += 1
            self.state.is_loading = False

        self.state.original_image = data_url
        self.state.transformed_image = None
        self.state.error = None
        logger.info("Source image selected")

    def report_error(self, message: str) -> None:
        """Show a local failure (file read, validation) in the error banner."""
        self.state.error = message
        logger.warning(f"Reported error: {message}")

    async def load_image(self, path: str) -> bool:
        """Read ``path`` and select it as the source portrait.

        Args:
            path: Filesystem path of the uploaded file

        Returns:
            True if the image was selected, False if reading failed
        """
        try:
            data_url = await read_image_as_data_url(path)
        except ImageSourceError as e:
            self.report_error(str(e))
            return False
        self.select_image(data_url)
        return True

    # -- Instruction ----------------------------------------------------------

    def set_instruction(self, text: str | None) -> None:
        """Update the transient instruction text."""
        self.state.instruction = text or ""

    # -- Transformation -------------------------------------------------------

    def start_transformation(self, instruction: str | None = None) -> PendingTransformation:
        """Begin a transformation request.

        Args:
            instruction: Instruction to use for this request; stored only if
                the request is accepted (the current instruction if None)

        Returns:
            The pending request, to be passed to complete/fail

        Raises:
            TransformationRejected: If no source image is selected or a
                request is already outstanding
        """
        if self.state.original_image is None:
            raise TransformationRejected("Select a character portrait first")
        if self.state.is_loading:
            raise TransformationRejected("A transformation is already in progress")

        if instruction is not None:
            self.set_instruction(instruction)
        self.state.generation += 1
        self.state.is_loading = True
        self.state.error = None

        logger.info(f"Transformation #{self.state.generation} started")
        return PendingTransformation(
            token=self.state.generation,
            source_image=self.state.original_image,
            instruction=self.state.instruction,
        )

    def _is_current(self, pending: PendingTransformation) -> bool:
        if pending.token != self.state.generation or not self.state.is_loading:
            logger.warning(f"Ignoring stale completion of transformation #{pending.token}")
            return False
        return True

    def _next_timestamp(self) -> int:
        now = self._clock()
        if self.state.history:
            return max(now, self.state.history[0].timestamp + 1)
        return now

    def complete_transformation(self, pending: PendingTransformation, image_url: str) -> bool:
        """Record a successful transformation.

        Returns:
            True if applied, False if the completion was stale
        """
        if not self._is_current(pending):
            return False

        result = TransformationResult(
            image_url=image_url,
            timestamp=self._next_timestamp(),
            prompt_used=pending.instruction.strip() or self.default_prompt_label,
        )
        self.state.is_loading = False
        self.state.transformed_image = image_url
        self.state.history = [result, *self.state.history]

        logger.info(
            f"Transformation #{pending.token} complete "
            f"({len(self.state.history)} in history)"
        )
        return True

    def fail_transformation(self, pending: PendingTransformation, message: str) -> bool:
        """Record a failed transformation.

        Returns:
            True if applied, False if the completion was stale
        """
        if not self._is_current(pending):
            return False

        self.state.is_loading = False
        self.state.error = message
        logger.warning(f"Transformation #{pending.token} failed: {message}")
        return True

    async def resolve_transformation(
        self, pending: PendingTransformation, client: Transformer
    ) -> bool:
        """Call the service for ``pending`` and apply the outcome.

        All failures are converted to state here; nothing propagates.

        Returns:
            True if a successful result was recorded
        """
        try:
            image_url = await client.transform(pending.source_image, pending.instruction)
        except TransformationError as e:
            self.fail_transformation(pending, str(e))
            return False
        except Exception as e:
            logger.error(f"Unexpected transformation failure: {e}", exc_info=True)
            self.fail_transformation(pending, str(e) or e.__class__.__name__)
            return False
        return self.complete_transformation(pending, image_url)

    async def run_transformation(self, client: Transformer) -> bool:
        """Start a transformation and wait for it to resolve."""
        pending = self.start_transformation()
        return await self.resolve_transformation(pending, client)

    # -- History --------------------------------------------------------------

    def select_history_item(self, index: int) -> bool:
        """Show a past result again.

        Args:
            index: Position in history (0 is newest)

        Returns:
            True if the item exists and is now shown
        """
        if index < 0 or index >= len(self.state.history):
            logger.warning(f"History item {index} does not exist")
            return False

        self.state.transformed_image = self.state.history[index].image_url
        return True

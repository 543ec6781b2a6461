"""Gradio event handlers.

Every handler maps one user interaction to exactly one controller
transition and returns component updates derived from :func:`render`.

All handlers that change what is displayed return updates for
:data:`VIEW_OUTPUTS` order: (transform button, error banner, result image,
result status, download button, history gallery, session state).
"""

import logging
import shutil
import tempfile
from pathlib import Path

import gradio as gr

from character_creator.core.config import config
from character_creator.core.image_source import ImageSourceError, data_url_to_image, export_image
from character_creator.core.transform_client import TransformationServiceClient

from .render import render
from .state import TransformationController, TransformationRejected
from .validation import ValidationError, validate_instruction, validate_upload_path

logger = logging.getLogger(__name__)

VIEW_OUTPUTS = (
    "transform_button",
    "error_banner",
    "result_image",
    "result_status",
    "download_button",
    "history_gallery",
    "ui_state",
)

_client: TransformationServiceClient | None = None


def get_transformation_client() -> TransformationServiceClient:
    """Return the process-wide transformation client (created on first use)."""
    global _client
    if _client is None:
        _client = TransformationServiceClient(config)
    return _client


def new_controller() -> TransformationController:
    """Create a controller for a fresh browser session."""
    return TransformationController(default_prompt_label=config.default_prompt_label)


def _export_current(controller: TransformationController) -> str | None:
    """Write the shown result to the session's export folder for download.

    Each session owns one folder holding one file, overwritten whenever the
    shown image changes. Re-exporting the same image does not touch disk.
    """
    image_url = controller.state.transformed_image
    if controller.export_dir is None:
        controller.export_dir = Path(tempfile.mkdtemp(prefix="session-", dir=config.exports_dir))

    target = controller.export_dir / config.download_filename
    if controller.exported_image == image_url and target.exists():
        return str(target)

    try:
        export_image(image_url, controller.export_dir, config.download_filename)
    except ImageSourceError as e:
        logger.error(f"Could not export render: {e}")
        return None

    controller.exported_image = image_url
    return str(target)


def discard_session(controller: TransformationController) -> None:
    """Remove a closed session's export folder."""
    if controller.export_dir is None:
        return
    shutil.rmtree(controller.export_dir, ignore_errors=True)
    logger.info(f"Removed session exports: {controller.export_dir}")
    controller.export_dir = None
    controller.exported_image = None


def view_updates(controller: TransformationController, export: bool = False) -> tuple:
    """Build the component updates for the controller's current state.

    Args:
        controller: Session controller
        export: Write the shown result to disk and point the download button at it

    Returns:
        Tuple of updates in VIEW_OUTPUTS order
    """
    view = render(controller.state)

    result_image = None
    if view.result_image is not None:
        try:
            result_image = data_url_to_image(view.result_image)
        except ImageSourceError as e:
            logger.error(f"Could not display result: {e}")

    if not view.download_available:
        download_update = gr.update(visible=False, value=None)
    elif export:
        download_update = gr.update(visible=True, value=_export_current(controller))
    else:
        download_update = gr.update()

    gallery_items = []
    for image_url, caption in view.history_items:
        try:
            gallery_items.append((data_url_to_image(image_url), caption))
        except ImageSourceError as e:
            logger.error(f"Skipping unreadable history item: {e}")

    return (
        gr.update(interactive=view.transform_enabled, value=view.transform_label),
        gr.update(visible=view.error_visible, value=view.error_message),
        gr.update(visible=view.result_mode == "result", value=result_image),
        gr.update(visible=view.result_mode != "result", value=view.status_message),
        download_update,
        gr.update(visible=view.history_visible, value=gallery_items),
        controller,
    )


async def select_source_image(
    image_path: str | None, controller: TransformationController
) -> tuple:
    """Handle a new upload in the input image control.

    Args:
        image_path: Filepath of the uploaded image (None when cleared)
        controller: Session controller

    Returns:
        Tuple of updates in VIEW_OUTPUTS order
    """
    try:
        path = validate_upload_path(image_path)
    except ValidationError:
        # The control was cleared; nothing to select
        return view_updates(controller)

    await controller.load_image(path)
    return view_updates(controller)


def update_instruction(
    instruction: str, controller: TransformationController
) -> TransformationController:
    """Keep the controller's transient instruction in sync with the text box."""
    controller.set_instruction(instruction)
    return controller


async def transform_image(instruction: str, controller: TransformationController):
    """Run one transformation, showing the loading view while it is outstanding.

    This is an async generator: Gradio renders each yielded tuple, so the
    button is disabled and the loading pane shown before the remote call.

    Args:
        instruction: Instruction text box value
        controller: Session controller

    Yields:
        Tuples of updates in VIEW_OUTPUTS order
    """
    try:
        text = validate_instruction(instruction, config.max_instruction_length)
        pending = controller.start_transformation(instruction=text)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        controller.report_error(str(e))
        yield view_updates(controller)
        return
    except TransformationRejected as e:
        logger.warning(f"Transformation rejected: {e}")
        yield view_updates(controller)
        return

    yield view_updates(controller)

    succeeded = await controller.resolve_transformation(pending, get_transformation_client())
    yield view_updates(controller, export=succeeded)


def select_history_item(evt: gr.SelectData, controller: TransformationController) -> tuple:
    """Show a past render chosen in the vault gallery.

    Args:
        evt: Gradio SelectData event containing the selected index
        controller: Session controller

    Returns:
        Tuple of updates in VIEW_OUTPUTS order
    """
    selected = controller.select_history_item(evt.index)
    return view_updates(controller, export=selected)

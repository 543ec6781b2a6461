"""Gradio UI for Character Creator."""

import logging

import gradio as gr

from character_creator.core.config import config

from .components import CUSTOM_CSS, create_footer, create_header, section_title
from .handlers import (
    discard_session,
    new_controller,
    select_history_item,
    select_source_image,
    transform_image,
    update_instruction,
)
from .render import EMPTY_MESSAGE, TRANSFORM_LABEL

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    app = gr.Blocks(title="Character Creator")

    with app:
        # Session state - one controller per user; exports removed when the session closes
        ui_state = gr.State(new_controller(), delete_callback=discard_session)

        create_header(config.model_id)

        with gr.Row(equal_height=False):
            with gr.Column(scale=1):
                with gr.Group(elem_classes="cc-panel"):
                    section_title(1, "Input Image")
                    source_image = gr.Image(
                        label="Select a character portrait",
                        type="filepath",
                        sources=["upload", "clipboard"],
                        height=360,
                    )
                    gr.Markdown("*PNG, JPG or WEBP supported. Upload again to replace.*")

                with gr.Group(elem_classes="cc-panel"):
                    section_title(2, "Instructions (Optional)")
                    instruction_input = gr.Textbox(
                        show_label=False,
                        placeholder=(
                            "e.g. Add a leather jacket, make him look like a mob boss, "
                            "change the time of day to sunset..."
                        ),
                        lines=5,
                        max_length=config.max_instruction_length,
                    )
                    transform_button = gr.Button(
                        TRANSFORM_LABEL,
                        variant="primary",
                        interactive=False,
                        elem_classes="cc-transform-btn",
                    )
                    error_banner = gr.Markdown(visible=False, elem_classes="cc-error")

            with gr.Column(scale=1):
                with gr.Group(elem_classes="cc-panel"):
                    with gr.Row():
                        section_title(3, "Render Output")
                        download_button = gr.DownloadButton(
                            "Download HD", visible=False, size="sm", variant="secondary"
                        )
                    result_image = gr.Image(
                        label="Transformed Character",
                        type="pil",
                        interactive=False,
                        visible=False,
                        height=480,
                    )
                    result_status = gr.Markdown(EMPTY_MESSAGE, elem_classes="cc-status")

        with gr.Column(visible=True):
            history_gallery = gr.Gallery(
                label="Your Vault",
                columns=4,
                object_fit="cover",
                allow_preview=False,
                visible=False,
            )

        create_footer()

        view_outputs = [
            transform_button,
            error_banner,
            result_image,
            result_status,
            download_button,
            history_gallery,
            ui_state,
        ]

        source_image.upload(
            fn=select_source_image,
            inputs=[source_image, ui_state],
            outputs=view_outputs,
        )

        instruction_input.change(
            fn=update_instruction,
            inputs=[instruction_input, ui_state],
            outputs=[ui_state],
        )

        transform_button.click(
            fn=transform_image,
            inputs=[instruction_input, ui_state],
            outputs=view_outputs,
        )

        history_gallery.select(
            fn=select_history_item,
            inputs=[ui_state],
            outputs=view_outputs,
        )

    return app, CUSTOM_CSS


def main():
    """Main entry point for the application."""
    logger.info("Starting Character Creator...")
    logger.info(f"Configuration: {config.model_dump(exclude={'gemini_api_key'})}")

    if not config.gemini_api_key:
        logger.warning("No Gemini API key configured; transformations will fail until one is set")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.server_name}:{config.server_port}")

    app.queue()
    app.launch(
        server_name=config.server_name,
        server_port=config.server_port,
        share=config.share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
        allowed_paths=[str(config.exports_dir)],
    )


if __name__ == "__main__":
    main()

"""Prompt text sent alongside the source portrait."""

STYLE_PROMPT = """\
Transform the person in this image into a Grand Theft Auto V loading-screen character.
Render them in the signature GTA V art style: bold clean outlines, saturated cel-shaded
colors, painterly digital illustration with crisp highlights and strong contrast.
Show the full body in a confident pose with the Los Santos cityscape behind them.
Keep the subject recognisable: preserve their face shape, hairstyle, skin tone and
overall outfit unless told otherwise.
Do NOT add any text, logos, captions or watermarks to the image.
"""

INSTRUCTION_PREFIX = "Additional instructions from the user:\n"

# Label recorded in history when the user gave no instruction
DEFAULT_PROMPT_LABEL = "Standard GTA Transformation"


def build_transformation_prompt(instruction: str | None = None) -> str:
    """Compose the text part of a transformation request.

    Args:
        instruction: Optional free-text instruction from the user

    Returns:
        The fixed style direction, followed by the instruction when one is given
    """
    if instruction and instruction.strip():
        return f"{STYLE_PROMPT}\n{INSTRUCTION_PREFIX}{instruction.strip()}\n"
    return STYLE_PROMPT

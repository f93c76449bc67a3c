"""Sensei Vision: technique coaching from a single frame plus context."""

import base64
import binascii
from typing import cast

from loguru import logger
from pydantic_ai import Agent, BinaryContent
from sqlalchemy.orm import Session

from app.athletes.classifier import classify_athlete
from app.athletes.summary import format_classification
from app.config.models import LLM_PROVIDER, VISION_MODEL
from app.services.llm.errors import CompletionError, EmptyCompletionError
from app.services.llm.model import get_model
from app.users.profile_repository import ProfileRepository
from app.vision.errors import InvalidImageError, MissingVisionInputError
from app.vision.prompts import build_analyze_prompt, build_chat_prompt, build_system_prompt
from app.vision.schemas import VisionOutput, VisionReply, VisionRequest

# Input limits (characters)
MAX_USER_TEXT = 4000
MAX_IMAGE_BASE64 = 2_000_000
MAX_PRIOR = 8000
MAX_MESSAGE = 2000
MAX_LOCALE_HINT = 20

# Output limits (characters)
MAX_REPLY = 8000
MAX_KEY_FIX = 400
MAX_LIST_ITEM = 300

DEFAULT_IMAGE_MEDIA_TYPE = "image/jpeg"
VISION_TEMPERATURE = 0.25
VISION_MAX_OUTPUT_TOKENS = 2000


def clip(value: str | None, max_chars: int) -> str:
    """Coerce to string and cut to max_chars."""
    return (value or "")[:max_chars]


def decode_image(image_base64: str) -> BinaryContent:
    """Decode a raw base64 string or a ``data:`` URL into binary image content.

    Raw base64 is assumed to be JPEG.

    Raises:
        InvalidImageError: If the payload is too large or not valid base64
    """
    if len(image_base64) > MAX_IMAGE_BASE64:
        raise InvalidImageError("Image is too large.")

    media_type = DEFAULT_IMAGE_MEDIA_TYPE
    payload = image_base64
    if image_base64.startswith("data:"):
        header, _, payload = image_base64.partition(",")
        declared = header[len("data:") :].split(";")[0]
        if declared:
            media_type = declared

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("Image is not valid base64.") from e
    if not data:
        raise InvalidImageError("Image is empty.")
    return BinaryContent(data=data, media_type=media_type)


def sanitize_output(output: VisionOutput) -> VisionReply:
    """Clip every text field of the model output to its display limit."""
    return VisionReply(
        reply=clip(output.reply, MAX_REPLY),
        grade=output.grade,
        key_fix=clip(output.key_fix, MAX_KEY_FIX),
        drills=[clip(d, MAX_LIST_ITEM) for d in output.drills],
        questions=[clip(q, MAX_LIST_ITEM) for q in output.questions],
    )


async def run_vision(session: Session, user_id: str, request: VisionRequest) -> VisionReply:
    """Analyze a technique frame or continue a vision coaching chat.

    Args:
        session: Database session
        user_id: Requesting user
        request: Vision request

    Returns:
        Sanitized VisionReply

    Raises:
        MissingVisionInputError: If there is no text, image or message
        InvalidImageError: If the image cannot be decoded
        CompletionError: If the completion service fails or returns nothing
    """
    user_text = clip(request.user_text, MAX_USER_TEXT)
    image_base64 = (request.image_base64 or "").strip()
    prior = clip(request.prior, MAX_PRIOR)
    message = clip(request.message, MAX_MESSAGE)
    locale_hint = clip(request.locale_hint, MAX_LOCALE_HINT) or "auto"

    if not user_text and not image_base64 and not message:
        raise MissingVisionInputError()

    classification_block = None
    profile = ProfileRepository.get(session, user_id)
    if profile is not None:
        classification_block = format_classification(classify_athlete(profile))

    if request.mode == "chat":
        prompt = build_chat_prompt(user_text, prior, message, classification_block)
    else:
        prompt = build_analyze_prompt(user_text, classification_block)

    content: list = [prompt]
    if image_base64:
        content.append(decode_image(image_base64))

    model = get_model(LLM_PROVIDER, VISION_MODEL)
    agent = Agent(
        model=model,
        system_prompt=build_system_prompt(locale_hint),
        output_type=VisionOutput,
    )

    logger.info(
        "vision: Running analysis",
        user_id=user_id,
        mode=request.mode,
        has_image=bool(image_base64),
        locale_hint=locale_hint,
    )

    try:
        result = await agent.run(
            content,
            model_settings={"temperature": VISION_TEMPERATURE, "max_tokens": VISION_MAX_OUTPUT_TOKENS},
        )
    except Exception as e:
        logger.error("vision: Completion call failed", error_type=type(e).__name__, error_message=str(e))
        raise CompletionError("Sensei Vision", str(e) or "Sensei Vision failed.") from e

    output = cast(VisionOutput, result.output)
    if output is None:
        raise EmptyCompletionError("Sensei Vision")

    reply = sanitize_output(output)
    logger.info("vision: Analysis complete", grade=reply.grade, drills=len(reply.drills))
    return reply

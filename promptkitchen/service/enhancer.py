from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
import pydantic

from promptkitchen.errors import ConfigurationError, ValidationError
from promptkitchen.llm.deepseek_client import DeepSeekClient
from promptkitchen.models import EnhancementRequest, EnhancementResult
from promptkitchen.prompting.instructions import active_techniques, build_instructions, summarize_improvements
from promptkitchen.settings import Settings

logger = logging.getLogger(__name__)


def parse_request(payload: Any) -> EnhancementRequest:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    prompt = payload.get("originalPrompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError("Prompt cannot be empty")
    body = dict(payload)
    if body.get("techniques") is None:
        body["techniques"] = []
    try:
        return EnhancementRequest.model_validate(body)
    except pydantic.ValidationError as e:
        first = (e.errors() or [{}])[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        raise ValidationError(f"Invalid request field {loc}: {first.get('msg', 'invalid value')}") from e


def enhance_prompt(
    payload: Dict[str, Any],
    *,
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> EnhancementResult:
    """
    Validate -> build instruction -> one completion call -> map to the response envelope.

    Raises EnhancementError subclasses; the HTTP layer turns them into `{"status": "error"}` bodies.
    Nothing reaches the network unless the prompt is non-blank and a credential is configured.
    """
    req = parse_request(payload)

    api_key = (settings.deepseek_api_key or "").strip()
    if not api_key:
        logger.error("DeepSeek API key is not configured")
        raise ConfigurationError("API key not configured on server")
    logger.info("DeepSeek API key configured")

    active = active_techniques(req.techniques)
    logger.info(
        "Processing prompt (%d chars, %d active techniques): %r",
        len(req.original_prompt),
        len(active),
        req.original_prompt[:50] + "...",
    )

    instruction = build_instructions(req.techniques)
    client = DeepSeekClient(
        api_key=api_key,
        base_url=settings.deepseek_base_url,
        timeout_s=settings.request_timeout_s,
        transport=transport,
    )
    enhanced = client.chat(
        model=settings.deepseek_model,
        messages=[
            {"role": "system", "content": instruction.system_message},
            {"role": "user", "content": req.original_prompt},
        ],
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )
    logger.info("Enhanced prompt received (%d chars)", len(enhanced))

    return EnhancementResult(
        status="completed",
        original=req.original_prompt,
        enhanced=enhanced,
        improvements=summarize_improvements(req.techniques),
    )

from __future__ import annotations
from typing import Any

from langchain.chat_models import init_chat_model
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage

from autoresume.settings import SETTINGS
from autoresume.storage.models import ModelCredential

def make_client(credential: ModelCredential, temperature: float | None = None) -> BaseChatModel:
    if temperature is None:
        temperature = SETTINGS.generation_temperature
    return init_chat_model(
        credential.model,
        model_provider=credential.provider or None,
        api_key=credential.api_key,
        temperature=temperature,
    )

def _content_text(content: Any) -> str:
    # some providers answer with a list of content blocks
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)

async def generate_text(credential: ModelCredential, prompt: str) -> str:
    llm = make_client(credential)
    resp = await llm.ainvoke([HumanMessage(content=prompt)])
    return _content_text(resp.content)

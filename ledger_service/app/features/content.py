from __future__ import annotations

from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel, Field

from ..models.project import ContentLength, ContentType
from .chains import invoke_text


SYSTEM_INSTRUCTION = """
You are an expert content writer. Write engaging, well-structured content
that reads naturally and stays on the requested topic.
Return only the content itself, without any preamble or closing remarks.
"""

HUMAN_TEMPLATE = """
Create a {content_type} about "{topic}".
Tone: {tone}
Keywords to include: {keywords}
Length: approximately {words} words
"""


class ContentRequest(BaseModel):
    type: ContentType
    topic: str = Field(min_length=1)
    tone: str = "professional"
    keywords: list[str] = Field(default_factory=list)
    length: ContentLength = ContentLength.MEDIUM


class ContentWriter:
    def __init__(self, chat_model: BaseChatModel) -> None:
        self._chat_model = chat_model

    def generate(self, request: ContentRequest) -> str:
        return invoke_text(
            self._chat_model,
            feature="content",
            system=SYSTEM_INSTRUCTION,
            human=HUMAN_TEMPLATE,
            variables={
                "content_type": request.type.value,
                "topic": request.topic,
                "tone": request.tone,
                "keywords": ", ".join(request.keywords) or "none",
                "words": request.length.approx_words,
            },
        )

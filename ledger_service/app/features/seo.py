from __future__ import annotations

from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel, Field, field_validator

from .chains import invoke_structured


TITLE_MAX_LEN = 60
META_DESCRIPTION_MAX_LEN = 160
KEYWORD_SUGGESTION_COUNT = 10

ANALYSIS_INSTRUCTION = f"""
You are an SEO specialist. For the given content, propose an SEO title of at most
{TITLE_MAX_LEN} characters, a meta description of at most {META_DESCRIPTION_MAX_LEN}
characters, the most relevant keywords, and a readability score from 0 to 100.
The response should contain ONLY the raw JSON string.
"""

KEYWORD_INSTRUCTION = f"""
You are an SEO keyword researcher. Suggest exactly {KEYWORD_SUGGESTION_COUNT}
search keywords or short keyword phrases related to the given content.
The response should contain ONLY the raw JSON string.
"""


class SeoAnalysis(BaseModel):
    title: str
    meta_description: str
    keywords: list[str] = Field(default_factory=list)
    readability_score: int = Field(ge=0, le=100)

    @field_validator("title")
    @classmethod
    def _truncate_title(cls, value: str) -> str:
        return value.strip()[:TITLE_MAX_LEN]

    @field_validator("meta_description")
    @classmethod
    def _truncate_meta_description(cls, value: str) -> str:
        return value.strip()[:META_DESCRIPTION_MAX_LEN]


class KeywordSuggestions(BaseModel):
    keywords: list[str] = Field(default_factory=list)


class SeoReport(BaseModel):
    analysis: SeoAnalysis
    keyword_suggestions: list[str]


class SeoAnalyzer:
    def __init__(self, chat_model: BaseChatModel) -> None:
        self._chat_model = chat_model

    def analyze(self, content: str) -> SeoAnalysis:
        return invoke_structured(
            self._chat_model,
            feature="seo",
            system=ANALYSIS_INSTRUCTION,
            human="{content}",
            variables={"content": content},
            output_model=SeoAnalysis,
        )

    def suggest_keywords(self, content: str) -> list[str]:
        result = invoke_structured(
            self._chat_model,
            feature="seo",
            system=KEYWORD_INSTRUCTION,
            human="{content}",
            variables={"content": content},
            output_model=KeywordSuggestions,
        )
        return [kw.strip() for kw in result.keywords if kw.strip()][:KEYWORD_SUGGESTION_COUNT]

    def report(self, content: str) -> SeoReport:
        return SeoReport(
            analysis=self.analyze(content),
            keyword_suggestions=self.suggest_keywords(content),
        )

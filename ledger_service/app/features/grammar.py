from __future__ import annotations

from langchain_core.language_models.chat_models import BaseChatModel
from pydantic import BaseModel, Field

from .chains import invoke_structured


GRAMMAR_INSTRUCTION = """
You are a careful copy editor. Check the given text for grammar, spelling,
punctuation and style issues. Report each issue with the original fragment,
a suggested replacement and a short explanation, then return the fully
corrected text and an overall quality score from 0 to 100.
The response should contain ONLY the raw JSON string.
"""

ORIGINALITY_INSTRUCTION = """
You are a plagiarism analyst. Estimate how original the given text is,
as a score from 0 (copied) to 100 (fully original), and list any passages
that look like commonly published phrasing.
The response should contain ONLY the raw JSON string.
"""


class Correction(BaseModel):
    original: str
    suggestion: str
    explanation: str = ""


class GrammarResult(BaseModel):
    corrections: list[Correction] = Field(default_factory=list)
    corrected_text: str
    overall_score: int = Field(ge=0, le=100)


class OriginalityResult(BaseModel):
    originality_score: int = Field(ge=0, le=100)
    flagged_passages: list[str] = Field(default_factory=list)


class GrammarReport(BaseModel):
    grammar: GrammarResult
    originality: OriginalityResult


class GrammarChecker:
    def __init__(self, chat_model: BaseChatModel) -> None:
        self._chat_model = chat_model

    def check(self, text: str) -> GrammarResult:
        return invoke_structured(
            self._chat_model,
            feature="grammar",
            system=GRAMMAR_INSTRUCTION,
            human="{text}",
            variables={"text": text},
            output_model=GrammarResult,
        )

    def check_originality(self, text: str) -> OriginalityResult:
        return invoke_structured(
            self._chat_model,
            feature="plagiarism",
            system=ORIGINALITY_INSTRUCTION,
            human="{text}",
            variables={"text": text},
            output_model=OriginalityResult,
        )

    def review(self, text: str) -> GrammarReport:
        """문법 검사와 표절 검사를 한 번의 기능 호출로 묶는다."""
        return GrammarReport(grammar=self.check(text), originality=self.check_originality(text))

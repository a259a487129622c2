from __future__ import annotations

from common.mongo.types import utc_now

from ..features.content import ContentRequest, ContentWriter
from ..features.grammar import GrammarChecker, GrammarReport
from ..features.seo import SeoAnalyzer, SeoReport
from ..models.project import Project
from ..repositories.interfaces import ProjectRepositoryInterface
from .feature_gate import FeatureGate, GatedResult


class WritingService:
    """AI 글쓰기 기능 모음. 모든 기능은 FeatureGate 를 거쳐 1 크레딧을 소비한다."""

    def __init__(
        self,
        gate: FeatureGate,
        writer: ContentWriter,
        grammar: GrammarChecker,
        seo: SeoAnalyzer,
        project_repo: ProjectRepositoryInterface,
    ) -> None:
        self._gate = gate
        self._writer = writer
        self._grammar = grammar
        self._seo = seo
        self._project_repo = project_repo

    def generate_content(self, account_id: str, request: ContentRequest) -> GatedResult[Project]:
        result = self._gate.run(account_id, "content", lambda: self._writer.generate(request))

        now = utc_now()
        project = self._project_repo.insert(
            Project(
                account_id=account_id,
                type=request.type,
                topic=request.topic,
                tone=request.tone,
                keywords=request.keywords,
                length=request.length,
                content=result.value,
                created_at=now,
                updated_at=now,
            )
        )
        return GatedResult(value=project, remaining=result.remaining)

    def check_grammar(self, account_id: str, text: str) -> GatedResult[GrammarReport]:
        return self._gate.run(account_id, "grammar", lambda: self._grammar.review(text))

    def analyze_seo(self, account_id: str, content: str) -> GatedResult[SeoReport]:
        return self._gate.run(account_id, "seo", lambda: self._seo.report(content))

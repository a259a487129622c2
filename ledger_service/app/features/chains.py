from __future__ import annotations

import logging
from typing import Any, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import PydanticOutputParser, StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel

from ..exceptions import ProviderError


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def invoke_structured(
    chat_model: BaseChatModel,
    *,
    feature: str,
    system: str,
    human: str,
    variables: dict[str, Any],
    output_model: type[T],
) -> T:
    """JSON 출력을 output_model 로 파싱하는 체인을 실행한다.

    호출 실패와 파싱 실패는 모두 ProviderError 로 바꾼다.
    """
    parser = PydanticOutputParser(pydantic_object=output_model)

    # format_instructions 에 중괄호가 포함되므로 템플릿 문자열에 직접 넣지 않고 partial() 로 주입한다.
    prompt = ChatPromptTemplate.from_messages(
        [
            ("system", system + "\n\n{format_instructions}"),
            ("human", human),
        ]
    ).partial(format_instructions=parser.get_format_instructions())

    chain = prompt | chat_model | parser
    try:
        return chain.invoke(variables)
    except Exception as exc:  # noqa: BLE001
        logger.warning("%s chain failed: %s", feature, exc)
        raise ProviderError(feature, str(exc)) from exc


def invoke_text(
    chat_model: BaseChatModel,
    *,
    feature: str,
    system: str,
    human: str,
    variables: dict[str, Any],
) -> str:
    prompt = ChatPromptTemplate.from_messages([("system", system), ("human", human)])
    chain = prompt | chat_model | StrOutputParser()
    try:
        text = chain.invoke(variables)
    except Exception as exc:  # noqa: BLE001
        logger.warning("%s chain failed: %s", feature, exc)
        raise ProviderError(feature, str(exc)) from exc

    if not text.strip():
        raise ProviderError(feature, "empty response")
    return text.strip()

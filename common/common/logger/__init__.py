import json
import logging
import os
import sys


# JSON 로그에 그대로 옮겨 담을 extra 필드 목록.
# HTTP 메타데이터(method, path 등)와 원장/주문 추적용 식별자를 함께 처리한다.
EXTRA_LOG_KEYS: tuple[str, ...] = (
    "request_id",
    "span_id",
    "method",
    "path",
    "query_params",
    "status",
    "body",
    "duration",
    "event",
    "account_id",
    "order_id",
    "payment_id",
)


def setup_logger(name: str = "ledger-service", level: str | None = None) -> logging.Logger:
    """애플리케이션 전역 로거를 설정하고 반환한다.

    Args:
        name: 로거 이름 (기본값: ledger-service, SERVICE_NAME 환경변수가 우선)
        level: 로그 레벨 (기본값: None -> 환경변수 LOG_LEVEL 또는 INFO 사용)

    Returns:
        설정된 logging.Logger 인스턴스
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    # 문자열 레벨을 logging 상수(int)로 변환
    log_level = getattr(logging, level.upper(), logging.INFO)

    service_name = os.getenv("SERVICE_NAME", name)
    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)

    # 이미 핸들러가 있다면 제거 (중복 출력 방지)
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter())

    logger.addHandler(handler)

    # 루트 로거에도 동일한 핸들러를 연결해 app.* / pymongo 로그까지 같은 포맷으로 출력한다.
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

    return logger


class JsonFormatter(logging.Formatter):
    """구조화 로그 수집을 위한 JSON 포맷터.

    - datetime, level, logger, message 필드를 기본으로 포함한다.
    - EXTRA_LOG_KEYS 에 해당하는 extra 값이 있으면 함께 기록한다.
    - 예외 정보가 있으면 exc_info 필드에 문자열로 추가한다.
    """

    def __init__(self) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        log_record: dict[str, object] = {
            "datetime": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_LOG_KEYS:
            if hasattr(record, key):
                log_record[key] = getattr(record, key)

        service_name = getattr(record, "service_name", None) or os.getenv(
            "SERVICE_NAME"
        )
        if service_name:
            log_record["service_name"] = service_name

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)

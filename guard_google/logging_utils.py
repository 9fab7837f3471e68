import logging
import sys
from typing import IO, Optional


# 외부 라이브러리 로그는 -vv 부터 노출
_NOISY_LOGGERS = ("google.auth", "urllib3", "kubernetes")


def setup_logging(verbosity: int = 0, stream: Optional[IO[str]] = None) -> None:
    level = logging.INFO
    if verbosity >= 1:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=stream or sys.stderr,
    )

    third_party_level = logging.DEBUG if verbosity >= 2 else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

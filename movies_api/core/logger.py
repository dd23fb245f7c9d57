import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from pythonjsonlogger import jsonlogger
from movies_api.core.trace import get_request_id
from movies_api.core.config import settings


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # проставляем поля ДО того, как запись уйдёт в очередь
        record.request_id = (getattr(record, "request_id", None)
                             or get_request_id() or "-")
        record.service = getattr(record, "service", None) or settings.app_name
        record.env = getattr(record, "env", None) or settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = "movies_service",
                       level: int = logging.INFO) -> None:
    global _listener
    if _listener is not None:
        return

    root = logging.getLogger()
    root.setLevel(level)

    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s"
        " %(message)s %(pathname)s %(lineno)d "
        "%(request_id)s %(service)s %(env)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(fmt)

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    # contextvar читается в потоке запроса, а не в потоке listener'а
    queue_handler.addFilter(RequestContextFilter())

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root.handlers = [queue_handler]

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    logging.getLogger(__name__).info(
        "logger_initialized",
        extra={"service": service})


def shutdown_logging() -> None:
    """Остановить listener и дописать очередь при выключении приложения."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None

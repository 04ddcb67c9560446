"""High-level API for document classification."""

import asyncio
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from document_classifier.classifier import Classifier
from document_classifier.config import ClassifierConfig
from document_classifier.logger import get_logger
from document_classifier.models import (
    ClassificationError,
    ClassificationOutcome,
    ClassificationResult,
)
from document_classifier.registry import FileTypeRegistry

logger = get_logger(__name__)

ClassificationCallback = Callable[
    [Optional[ClassificationError], Optional[ClassificationResult]], None
]

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _default_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(thread_name_prefix="document-classifier")
        return _executor


def classify_document(
    file_path: str,
    config: Optional[ClassifierConfig] = None,
    registry: Optional[FileTypeRegistry] = None,
) -> ClassificationOutcome:
    """Classify a file from synchronous code.

    Runs its own event loop, so it must not be called while an event loop
    is already running in this thread; async callers should await
    :meth:`Classifier.classify` instead.

    Args:
        file_path: Path to the uploaded file
        config: Classifier configuration (optional, uses defaults if not provided)
        registry: Supported file types (optional, uses the default table)

    Returns:
        ClassificationOutcome with the result or the structured error

    Examples:
        >>> outcome = classify_document("uploads/statement.pdf")
        >>> if outcome.ok:
        ...     print(outcome.result.type, outcome.result.source)
        ... else:
        ...     print(outcome.error.code, outcome.error.msg)
    """
    classifier = Classifier(registry=registry, config=config)
    return asyncio.run(classifier.classify(file_path))


def submit_classification(
    file_path: str,
    callback: ClassificationCallback,
    config: Optional[ClassifierConfig] = None,
    registry: Optional[FileTypeRegistry] = None,
    executor: Optional[Executor] = None,
) -> "Future[ClassificationOutcome]":
    """Classify a file in the background and report through a callback.

    The callback runs exactly once, as ``callback(error, None)`` on
    failure or ``callback(None, result)`` on success. The returned future
    resolves to the same outcome.
    """
    future = (executor or _default_executor()).submit(
        classify_document, file_path, config, registry
    )

    def _notify(done: "Future[ClassificationOutcome]") -> None:
        exc = done.exception()
        if exc is not None:
            logger.error(
                "Background classification crashed",
                extra_data={"file_path": file_path, "error_type": type(exc).__name__},
            )
            callback(ClassificationError(code=1, msg=str(exc)), None)
            return

        outcome = done.result()
        callback(outcome.error, outcome.result)

    future.add_done_callback(_notify)
    return future

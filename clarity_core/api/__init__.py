from .bill_text import (
    document_paths,
    document_urls,
    fetch_bill_texts,
    fetch_bill_texts_async,
    read_bill_texts,
)

__all__ = [
    "document_paths",
    "document_urls",
    "fetch_bill_texts",
    "fetch_bill_texts_async",
    "read_bill_texts",
]

"""Document operations: deliverables, research notes, protocols."""

from mission.api.refs import require_record, require_text
from mission.lib import store
from mission.models import Document, DocumentType, parse_enum


def _row_to_document(row: store.Record) -> Document:
    return store.from_row(row, Document)


def create_document(
    title: str,
    content: str,
    type: DocumentType | str,
    task_id: str | None = None,
) -> str:
    """Create document, optionally attached to a task."""
    require_text(title, "title")
    require_text(content, "content")
    doc_type = parse_enum(DocumentType, type, "document type")
    if task_id is not None:
        require_record("tasks", task_id)

    return store.ensure().insert(
        "documents",
        {"title": title, "content": content, "type": doc_type.value, "task_id": task_id},
    )


def get_document(doc_id: str) -> Document | None:
    row = store.ensure().get("documents", doc_id)
    return _row_to_document(row) if row else None


def list_documents(task_id: str | None = None) -> list[Document]:
    if task_id is None:
        rows = store.ensure().scan("documents")
    else:
        rows = store.ensure().scan("documents", index="by_task", eq=task_id)
    return [_row_to_document(row) for row in rows]

"""JSON shapes of API responses."""

from datetime import datetime

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.domain.entities import (
    DocumentAccess,
    DocumentActivity,
    DocumentComment,
    DocumentVersion,
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def document_to_dict(d: DocumentOutput) -> dict:
    return {
        "id": str(d.id),
        "title": d.title,
        "description": d.description,
        "category": d.category,
        "status": d.status.value,
        "current_version": d.current_version,
        "file_name": d.file_name,
        "file_size": d.file_size,
        "file_type": d.file_type,
        "created_by": d.created_by,
        "created_at": _iso(d.created_at),
        "updated_at": _iso(d.updated_at),
        "expiry_date": _iso(d.expiry_date),
        "days_until_expiry": d.days_until_expiry,
        "notification_days": d.notification_days,
        "lock_holder": d.lock_holder,
        "locked_at": _iso(d.locked_at),
        "tags": d.tags,
        "approved_by": d.approved_by,
        "approved_at": _iso(d.approved_at),
        "rejection_reason": d.rejection_reason,
        "last_action": d.last_action,
    }


def version_to_dict(v: DocumentVersion) -> dict:
    return {
        "id": str(v.id),
        "document_id": str(v.document_id),
        "version_number": v.version_number,
        "file_name": v.file_name,
        "file_size": v.file_size,
        "file_type": v.file_type,
        "created_by": v.created_by,
        "created_at": _iso(v.created_at),
        "change_notes": v.change_notes,
    }


def access_to_dict(a: DocumentAccess) -> dict:
    return {
        "id": str(a.id),
        "document_id": str(a.document_id),
        "user_id": a.user_id,
        "permission_level": a.permission_level.value,
        "granted_by": a.granted_by,
        "granted_at": _iso(a.granted_at),
    }


def activity_to_dict(a: DocumentActivity) -> dict:
    return {
        "id": str(a.id),
        "action": a.action.value,
        "actor_id": a.actor_id,
        "occurred_at": _iso(a.occurred_at),
        "comment": a.comment,
        "from_status": a.from_status.value if a.from_status else None,
        "to_status": a.to_status.value if a.to_status else None,
        "version_number": a.version_number,
    }


def comment_to_dict(c: DocumentComment) -> dict:
    return {
        "id": str(c.id),
        "author_id": c.author_id,
        "author_name": c.author_name,
        "content": c.content,
        "created_at": _iso(c.created_at),
    }

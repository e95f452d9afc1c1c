from __future__ import annotations

from typing import Dict, List, Optional

from .registry import register_api
from .serializers import serialize_subject
from .state import api_state


@register_api(
    "create_subject",
    description="Create a new study subject with a display color.",
    category="subjects",
    tags=("create",),
)
def create_subject(name: str, color: str = "slate", subject_id: Optional[str] = None) -> Dict[str, object]:
    subject = api_state.study.add_subject(name, color=color, subject_id=subject_id)
    return {"subject": serialize_subject(subject)}


@register_api(
    "list_all_subjects",
    description="List all subjects alphabetically.",
    category="subjects",
    tags=("list",),
)
def list_all_subjects() -> Dict[str, List[dict]]:
    subjects = sorted(api_state.study.state.subjects, key=lambda s: s.name.lower())
    return {"subjects": [serialize_subject(subject) for subject in subjects]}


@register_api(
    "delete_subject",
    description="Delete a subject. Recorded sessions for it are kept.",
    category="subjects",
    tags=("delete",),
)
def delete_subject(subject_id: str) -> Dict[str, object]:
    removed = api_state.study.remove_subject(subject_id)
    return {"deleted": removed, "subject_id": subject_id}

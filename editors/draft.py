"""
Editor view-model shared by every entity editor in the console.

An EditorState is immutable; each transition returns a new state. Side
effects (uploads, API calls) live in editors.workflow and report back through
the *_succeeded / *_failed transitions.

    closed -> editing -> saving -> closed
                 ^          |
                 +----------+  (save failed, draft kept)
    closed -> confirming_delete -> deleting -> closed
"""
from dataclasses import dataclass, field, replace, asdict, is_dataclass
from typing import Any, Callable, Dict, Optional

CLOSED = 'closed'
EDITING = 'editing'
SAVING = 'saving'
CONFIRMING_DELETE = 'confirming_delete'
DELETING = 'deleting'

# Keys that only exist on the draft, never on the server entity
UI_ONLY_FIELDS = ('staged', 'preview_url')


class InvalidTransition(ValueError):
    pass


@dataclass(frozen=True)
class EditorState:
    status: str = CLOSED
    draft: Optional[Dict[str, Any]] = None
    # Translation key of the message to surface, if any
    error: Optional[str] = None
    pending_delete: Any = None

    @property
    def is_new(self) -> bool:
        return bool(self.draft) and not self.draft.get('id')

    @property
    def is_busy(self) -> bool:
        return self.status in (SAVING, DELETING)

    def _expect(self, *statuses):
        if self.status not in statuses:
            raise InvalidTransition(f"Cannot go from {self.status} with this action")

    # ---------- editing ----------

    def open_new(self, defaults: Dict[str, Any]) -> 'EditorState':
        self._expect(CLOSED)
        draft = dict(defaults)
        draft.setdefault('id', None)
        draft['staged'] = {}
        draft['preview_url'] = None
        return EditorState(status=EDITING, draft=draft)

    def open_existing(self, entity, preview_field: Optional[str] = None,
                      extra: Optional[Dict[str, Any]] = None) -> 'EditorState':
        """Shallow copy of the selected row plus UI-only fields."""
        self._expect(CLOSED)
        draft = asdict(entity) if is_dataclass(entity) else dict(entity)
        draft['staged'] = {}
        draft['preview_url'] = (draft.get(preview_field) or None) if preview_field else None
        if extra:
            draft.update(extra)
        return EditorState(status=EDITING, draft=draft)

    def update(self, **changes) -> 'EditorState':
        self._expect(EDITING)
        draft = dict(self.draft)
        draft.update(changes)
        return replace(self, draft=draft)

    def stage_file(self, field_name: str, file) -> 'EditorState':
        self._expect(EDITING)
        staged = dict(self.draft.get('staged') or {})
        staged[field_name] = file
        return self.update(staged=staged)

    def request_save(self, validate: Callable[[Dict[str, Any]], Optional[str]]) -> 'EditorState':
        """Validation failure keeps the editor open with the message."""
        self._expect(EDITING)
        message = validate(self.draft)
        if message:
            return replace(self, error=message)
        return replace(self, status=SAVING, error=None)

    def save_failed(self, message: str, draft: Optional[Dict[str, Any]] = None) -> 'EditorState':
        """Back to editing; `draft` replaces the current one when given."""
        self._expect(SAVING)
        return replace(self, status=EDITING, error=message, draft=draft if draft is not None else self.draft)

    def save_succeeded(self) -> 'EditorState':
        self._expect(SAVING)
        return EditorState()

    def cancel(self) -> 'EditorState':
        return EditorState()

    # ---------- deleting ----------

    def request_delete(self, entity) -> 'EditorState':
        self._expect(CLOSED)
        return EditorState(status=CONFIRMING_DELETE, pending_delete=entity)

    def confirm_delete(self) -> 'EditorState':
        self._expect(CONFIRMING_DELETE)
        if not getattr(self.pending_delete, 'id', None):
            return EditorState()
        return replace(self, status=DELETING)

    def delete_succeeded(self) -> 'EditorState':
        self._expect(DELETING)
        return EditorState()

    def delete_failed(self, message: str) -> 'EditorState':
        """Back to idle with the error; the row stays as it was."""
        self._expect(DELETING)
        return EditorState(error=message)


@dataclass(frozen=True)
class SaveOutcome:
    state: EditorState
    entity: Any = None

    @property
    def ok(self) -> bool:
        return self.state.status == CLOSED and self.state.error is None


def server_fields(draft: Dict[str, Any]) -> Dict[str, Any]:
    """Draft without the UI-only keys."""
    return {key: value for key, value in draft.items() if key not in UI_ONLY_FIELDS}

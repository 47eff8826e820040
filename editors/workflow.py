"""
Side effects of the editor lifecycle: upload staged files, create/update,
delete. Every failure is reported as a transition on the EditorState; the
draft is never partially applied.
"""
from editors.draft import SAVING, DELETING, EditorState, SaveOutcome, InvalidTransition
from services.learning_admin_service import upload_learning_file
from utils.http_client import ApiError
from utils.logging_utils import console_logger, upload_logger, log_error, log_info


def run_save(editor, state):
    """
    Persist the draft of a state in `saving`.

    Staged files are uploaded first and their URLs substituted into the
    draft; an upload failure aborts the save before create/update is called.
    Files that did upload stay on the returned draft, so a retry does not
    send them again.

    Returns:
        SaveOutcome: closed state + saved entity, or editing state + error
    """
    if state.status != SAVING:
        raise InvalidTransition(f"run_save needs a saving editor, got {state.status}")

    draft = dict(state.draft)
    pending = dict(draft.get('staged') or {})
    for file_field, staged in list(pending.items()):
        url_field, scope = editor.upload_fields[file_field]
        try:
            extra = editor.on_upload(draft, file_field, staged)
            draft[url_field] = upload_learning_file(staged, scope)
            draft.update(extra)
        except ApiError as e:
            log_error(upload_logger, "Upload failed, save aborted", scope=scope, error=str(e))
            return SaveOutcome(state.save_failed(editor.save_error, _uploaded_draft(editor, draft, pending)))
        del pending[file_field]

    payload = editor.build_payload(draft)
    try:
        if draft.get('id'):
            entity = editor.update(draft['id'], payload)
        else:
            entity = editor.create(payload)
    except ApiError as e:
        log_error(console_logger, "Save failed", editor=type(editor).__name__,
                  entity_id=draft.get('id'), error=str(e))
        return SaveOutcome(state.save_failed(editor.save_error, _uploaded_draft(editor, draft, pending)))

    log_info(console_logger, "Entity saved", editor=type(editor).__name__, entity_id=draft.get('id'))
    return SaveOutcome(state.save_succeeded(), entity)


def _uploaded_draft(editor, draft, pending):
    """Draft with stored URLs in place and only the files still to upload staged."""
    draft = dict(draft, staged=pending)
    if editor.preview_field:
        draft['preview_url'] = draft.get(editor.preview_field) or None
    return draft


def save_form(editor, state, form, files=None):
    """Apply a submitted form, validate, and save when valid."""
    state = editor.apply_form(state, form, files)
    state = state.request_save(editor.validate)
    if state.status != SAVING:
        return SaveOutcome(state)
    return run_save(editor, state)


def run_delete(editor, state):
    """Delete the pending entity of a state in `deleting`."""
    if state.status != DELETING:
        raise InvalidTransition(f"run_delete needs a deleting editor, got {state.status}")

    entity = state.pending_delete
    try:
        editor.delete(entity.id)
    except ApiError as e:
        log_error(console_logger, "Delete failed", editor=type(editor).__name__,
                  entity_id=entity.id, error=str(e))
        return state.delete_failed(editor.delete_error)

    log_info(console_logger, "Entity deleted", editor=type(editor).__name__, entity_id=entity.id)
    return state.delete_succeeded()


def delete_entity(editor, entity):
    """Confirmed delete of `entity`, start to finish."""
    state = EditorState().request_delete(entity).confirm_delete()
    if state.status != DELETING:
        return state
    return run_delete(editor, state)

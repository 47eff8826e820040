import pytest

from editors.draft import (
    EditorState, InvalidTransition, SaveOutcome, server_fields,
    CLOSED, EDITING, SAVING, CONFIRMING_DELETE, DELETING,
)
from models.learning import Category


def _require_name(draft):
    return None if draft.get('name') else 'categories.form.validation.nameRequired'


def test_open_new_seeds_defaults_and_ui_fields():
    state = EditorState().open_new({'name': '', 'is_active': True})
    assert state.status == EDITING
    assert state.is_new
    assert state.draft['id'] is None
    assert state.draft['staged'] == {}
    assert state.draft['preview_url'] is None


def test_open_existing_copies_row_and_preview():
    category = Category(id='c1', name='Calm', slug='calm', image_url='http://cdn/c.png')
    state = EditorState().open_existing(category, preview_field='image_url', extra={'slug_touched': True})
    assert state.status == EDITING
    assert not state.is_new
    assert state.draft['name'] == 'Calm'
    assert state.draft['preview_url'] == 'http://cdn/c.png'
    assert state.draft['slug_touched'] is True
    # The row itself is not mutated by later edits
    state.update(name='Changed')
    assert category.name == 'Calm'


def test_update_returns_new_state():
    state = EditorState().open_new({'name': ''})
    updated = state.update(name='Yoga')
    assert updated.draft['name'] == 'Yoga'
    assert state.draft['name'] == ''


def test_request_save_with_validation_error_stays_editing():
    state = EditorState().open_new({'name': ''}).request_save(_require_name)
    assert state.status == EDITING
    assert state.error == 'categories.form.validation.nameRequired'


def test_request_save_valid_moves_to_saving_and_clears_error():
    state = EditorState().open_new({'name': ''}).request_save(_require_name)
    state = state.update(name='Yoga').request_save(_require_name)
    assert state.status == SAVING
    assert state.error is None
    assert state.is_busy


def test_save_failed_keeps_draft():
    state = EditorState().open_new({'name': 'Yoga'}).request_save(_require_name)
    failed = state.save_failed('categories.form.saveError')
    assert failed.status == EDITING
    assert failed.draft['name'] == 'Yoga'
    assert failed.error == 'categories.form.saveError'


def test_save_succeeded_closes_and_clears_draft():
    state = EditorState().open_new({'name': 'Yoga'}).request_save(_require_name).save_succeeded()
    assert state.status == CLOSED
    assert state.draft is None
    assert SaveOutcome(state).ok


def test_delete_flow_success():
    entity = Category(id='c1', name='Calm')
    state = EditorState().request_delete(entity)
    assert state.status == CONFIRMING_DELETE
    state = state.confirm_delete()
    assert state.status == DELETING
    assert state.is_busy
    assert state.delete_succeeded().status == CLOSED


def test_delete_failure_returns_to_idle_with_error():
    state = EditorState().request_delete(Category(id='c1')).confirm_delete()
    failed = state.delete_failed('categories.modals.deleteError')
    assert failed.status == CLOSED
    assert failed.error == 'categories.modals.deleteError'


def test_confirm_delete_without_id_is_a_no_op():
    state = EditorState().request_delete(Category()).confirm_delete()
    assert state.status == CLOSED
    assert state.error is None


def test_cancel_discards_draft():
    state = EditorState().open_new({'name': 'Yoga'}).cancel()
    assert state == EditorState()


def test_invalid_transitions_raise():
    with pytest.raises(InvalidTransition):
        EditorState().update(name='x')
    with pytest.raises(InvalidTransition):
        EditorState().save_succeeded()
    with pytest.raises(InvalidTransition):
        EditorState().open_new({}).confirm_delete()


def test_server_fields_drops_ui_only_keys():
    draft = EditorState().open_new({'name': 'Yoga'}).draft
    assert server_fields(draft) == {'name': 'Yoga', 'id': None}

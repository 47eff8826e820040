import io

from utils.security_utils import ADMIN_PROFILE_SESSION_KEY

ADMIN = {
    '_id': 'a1', 'fullName': 'Ana Admin', 'email': 'ana@example.com', 'role': 'admin',
    'createdAt': '2024-01-05', 'lastLogin': '2024-06-01', 'status': 'active',
}


def test_settings_shows_profile_from_me(auth_client, fake_api):
    fake_api.add('GET', '/admin/auth/me', {'admin': ADMIN})
    html = auth_client.get('/settings').get_data(as_text=True)
    assert 'Ana Admin' in html
    assert '2024-06-01' in html
    with auth_client.session_transaction() as sess:
        assert sess[ADMIN_PROFILE_SESSION_KEY]['email'] == 'ana@example.com'


def test_settings_falls_back_to_session_snapshot(auth_client, fake_api):
    fake_api.add('GET', '/admin/auth/me', {'message': 'boom'}, status=500)
    with auth_client.session_transaction() as sess:
        sess[ADMIN_PROFILE_SESSION_KEY] = dict(ADMIN, fullName='Cached Ana')
    html = auth_client.get('/settings').get_data(as_text=True)
    assert 'Cached Ana' in html
    assert 'Could not refresh your profile.' in html


def test_profile_edit_requires_name(auth_client, fake_api):
    response = auth_client.post('/settings/edit', data={'full_name': '', 'email': 'ana@example.com'})
    assert response.status_code == 400
    assert 'Please enter your full name.' in response.get_data(as_text=True)
    assert fake_api.calls_to('POST', '/admin/auth/profile') == []


def test_profile_edit_rejects_bad_email(auth_client, fake_api):
    response = auth_client.post('/settings/edit', data={'full_name': 'Ana', 'email': 'ana@'})
    assert response.status_code == 400
    assert 'Please enter a valid email address.' in response.get_data(as_text=True)


def test_profile_edit_uploads_image_and_saves(auth_client, fake_api):
    fake_api.add('POST', '/admin/learning/upload', {'url': 'https://cdn.example/ana.png'})
    fake_api.add('POST', '/admin/auth/profile', {'admin': dict(ADMIN, fullName='Ana B')})
    response = auth_client.post('/settings/edit', data={
        'full_name': 'Ana B', 'email': 'ana@example.com',
        'profile_file': (io.BytesIO(b'png'), 'ana.png', 'image/png'),
    }, content_type='multipart/form-data')
    assert response.status_code == 302
    assert fake_api.last('POST', '/admin/learning/upload').data == {'scope': 'other'}
    assert fake_api.last('POST', '/admin/auth/profile').json == {
        'fullName': 'Ana B', 'email': 'ana@example.com', 'profileImage': 'https://cdn.example/ana.png',
    }
    with auth_client.session_transaction() as sess:
        assert sess[ADMIN_PROFILE_SESSION_KEY]['fullName'] == 'Ana B'


def test_password_fields_are_required(auth_client, fake_api):
    response = auth_client.post('/settings/password', data={
        'current_password': 'old', 'new_password': '', 'confirm_password': '',
    })
    assert response.status_code == 400
    assert 'Please fill all password fields.' in response.get_data(as_text=True)
    assert fake_api.calls == []


def test_password_mismatch_blocks_call(auth_client, fake_api):
    response = auth_client.post('/settings/password', data={
        'current_password': 'old', 'new_password': 'new-1', 'confirm_password': 'new-2',
    })
    assert response.status_code == 400
    assert 'New password and confirm password do not match.' in response.get_data(as_text=True)
    assert fake_api.calls == []


def test_password_change_success(auth_client, fake_api):
    fake_api.add('POST', '/admin/auth/change-password', {'success': True})
    fake_api.add('GET', '/admin/auth/me', {'admin': ADMIN})
    response = auth_client.post('/settings/password', data={
        'current_password': 'old', 'new_password': 'new-1', 'confirm_password': 'new-1',
    }, follow_redirects=True)
    assert 'Password updated.' in response.get_data(as_text=True)
    assert fake_api.last('POST', '/admin/auth/change-password').json == {
        'currentPassword': 'old', 'newPassword': 'new-1',
    }


def test_password_change_failure(auth_client, fake_api):
    fake_api.add('POST', '/admin/auth/change-password', {'message': 'wrong password'}, status=400)
    fake_api.add('GET', '/admin/auth/me', {'admin': ADMIN})
    response = auth_client.post('/settings/password', data={
        'current_password': 'bad', 'new_password': 'new-1', 'confirm_password': 'new-1',
    }, follow_redirects=True)
    assert 'Failed to update password.' in response.get_data(as_text=True)

def test_slugify_endpoint(auth_client):
    response = auth_client.get('/api/console/slugify', query_string={'name': 'Stress Relief 101!'})
    assert response.status_code == 200
    assert response.get_json() == {'slug': 'stress-relief-101'}


def test_course_search_includes_drafts_and_filters_text(auth_client, fake_api):
    fake_api.add('GET', '/admin/learning/categories', {'items': [{'_id': 'c1', 'name': 'Stress Relief'}]})
    fake_api.add('GET', '/admin/learning/courses', {'items': [
        {'_id': 'k1', 'title': 'Breathing Basics', 'categoryId': 'c1', 'isPublished': False},
        {'_id': 'k2', 'title': 'Better Nights', 'categoryId': 'c1', 'isPublished': True},
    ]})
    response = auth_client.get('/api/console/courses/search?q=breath&categoryId=c1')
    assert response.status_code == 200
    body = response.get_json()
    assert body['total'] == 1
    assert body['items'][0]['id'] == 'k1'
    assert body['items'][0]['is_published'] is False
    assert fake_api.last('GET', '/admin/learning/courses').params == {'categoryId': 'c1'}
    assert fake_api.calls_to('GET', '/learning/search') == []


def test_course_search_matches_category_name(auth_client, fake_api):
    fake_api.add('GET', '/admin/learning/categories', {'items': [{'_id': 'c2', 'name': 'Sleep'}]})
    fake_api.add('GET', '/admin/learning/courses', {'items': [
        {'_id': 'k2', 'title': 'Better Nights', 'categoryId': 'c2'},
    ]})
    body = auth_client.get('/api/console/courses/search?q=sleep').get_json()
    assert [item['id'] for item in body['items']] == ['k2']
    assert fake_api.last('GET', '/admin/learning/courses').params is None


def test_course_search_without_match_is_empty(auth_client, fake_api):
    fake_api.add('GET', '/admin/learning/categories', {'items': []})
    fake_api.add('GET', '/admin/learning/courses', {'items': [{'_id': 'k1', 'title': 'Breathing Basics'}]})
    body = auth_client.get('/api/console/courses/search?q=zzz').get_json()
    assert body == {'items': [], 'total': 0}


def test_course_search_failure(auth_client, fake_api):
    fake_api.add('GET', '/admin/learning/categories', {'items': []})
    fake_api.add('GET', '/admin/learning/courses', {'message': 'boom'}, status=500)
    response = auth_client.get('/api/console/courses/search?q=x')
    assert response.status_code == 502
    assert response.get_json()['error'] == 'Could not load courses.'


def test_user_status_toggle_returns_new_pill(auth_client, fake_api):
    fake_api.add('PUT', '/admin/users/u2/status', {
        'user': {'_id': 'u2', 'fullName': 'Ben Learner', 'status': 'active'},
    })
    response = auth_client.put('/api/console/users/u2/status', json={'status': 'active'})
    assert response.status_code == 200
    assert fake_api.last('PUT', '/admin/users/u2/status').json == {'status': 'active'}
    body = response.get_json()
    assert body['user']['status'] == 'active'
    assert 'pill-emerald' in body['pill']
    assert 'data-status="active"' in body['pill']
    assert '>Active<' in body['pill']


def test_user_status_toggle_failure(auth_client, fake_api):
    fake_api.add('PUT', '/admin/users/u2/status', {'message': 'boom'}, status=500)
    response = auth_client.put('/api/console/users/u2/status', json={'status': 'blocked'})
    assert response.status_code == 502
    assert response.get_json()['error'] == 'Failed to update user status.'


def test_user_status_rejects_unknown_value(auth_client, fake_api):
    response = auth_client.put('/api/console/users/u2/status', json={'status': 'gone'})
    assert response.status_code == 400
    assert fake_api.calls == []


def test_user_status_requires_csrf_header_when_enabled(make_app, fake_api):
    client = make_app(CSRF_ENABLED=True).test_client()
    client.set_cookie('admin_jwt', 'tok')
    fake_api.add('PUT', '/admin/users/u2/status', {'user': {'_id': 'u2', 'status': 'active'}})

    assert client.put('/api/console/users/u2/status', json={'status': 'active'}).status_code == 403

    with client.session_transaction() as sess:
        sess['csrf_token'] = 'known-token'
    response = client.put('/api/console/users/u2/status', json={'status': 'active'},
                          headers={'X-CSRF-Token': 'known-token'})
    assert response.status_code == 200

"""
Admin endpoints over HTTP.
"""


class TestAdminAccounts:

    def test_register_and_login(self, client, api):
        admin = api.register_admin()

        assert admin['role'] == 'Admin'
        assert 'Authorization' in admin['headers']

    def test_register_rejects_unknown_role(self, client):
        response = client.post('/admin/register', json={
            'fullName': 'Root', 'email': 'root@example.com', 'password': 'Password123!', 'role': 'Owner',
        })

        assert response.status_code == 400

    def test_super_admin_creates_admin(self, client, api):
        super_admin = api.register_admin(role='Super-Admin')

        response = client.post('/admin/create', json={
            'fullName': 'New Admin', 'email': 'new.admin@example.com', 'password': 'Password123!',
        }, headers=super_admin['headers'])

        assert response.status_code == 201
        assert response.get_json()['data']['email'] == 'new.admin@example.com'

    def test_plain_admin_cannot_create_admin(self, client, api):
        admin = api.register_admin()

        response = client.post('/admin/create', json={
            'fullName': 'New Admin', 'email': 'new.admin@example.com', 'password': 'Password123!',
        }, headers=admin['headers'])

        assert response.status_code == 401
        assert response.get_json()['message'] == 'You cannot create an admin'


class TestAdminTasks:

    def test_manage_any_users_task(self, client, api):
        owner = api.register_user('Owner')
        admin = api.register_admin()
        task = api.create_task(owner, title='Owned')
        task_id = task['id']

        listed = client.get('/admin/tasks', headers=admin['headers']).get_json()['data']
        assert [t['id'] for t in listed] == [task_id]

        response = client.put(f'/admin/tasks/{task_id}/status', json={'newStatus': 'In-Progress'}, headers=admin['headers'])
        assert response.status_code == 200
        assert response.get_json()['data']['status'] == 'In-Progress'

        response = client.get(f'/admin/tasks/{task_id}', headers=admin['headers'])
        assert response.get_json()['data']['title'] == 'Owned'

        response = client.delete(f'/admin/tasks/{task_id}', headers=admin['headers'])
        assert response.status_code == 200
        assert client.get(f'/admin/tasks/{task_id}', headers=admin['headers']).status_code == 404

    def test_delete_comment(self, client, api):
        owner = api.register_user('Owner')
        admin = api.register_admin()
        task = api.create_task(owner)
        base = f"/tasks/{task['id']}/comments"
        comment = client.post(base, json={'content': 'Rude'}, headers=owner['headers']).get_json()['data']

        response = client.delete(
            f"/admin/tasks/{task['id']}/comments",
            json={'commentId': comment['id']},
            headers=admin['headers'],
        )
        assert response.status_code == 200

        remaining = client.get(f"/admin/tasks/{task['id']}/comments", headers=admin['headers']).get_json()['data']
        assert remaining == []

    def test_delete_comment_requires_comment_id(self, client, api):
        owner = api.register_user('Owner')
        admin = api.register_admin()
        task = api.create_task(owner)

        response = client.delete(f"/admin/tasks/{task['id']}/comments", json={}, headers=admin['headers'])

        assert response.status_code == 400

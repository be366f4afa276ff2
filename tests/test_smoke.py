import pytest


@pytest.mark.asyncio
@pytest.mark.smoke
async def test_smoke_user_lifecycle(client, make_payload):
    # Root
    r_root = await client.get('/')
    assert r_root.status_code == 200
    # Create user
    r_user = await client.post('/api/v1/users', json=make_payload(userName="smokeuser", email="smoke@example.com"))
    assert r_user.status_code == 201
    user_id = r_user.json()['id']
    # List users
    r_users = await client.get('/api/v1/users')
    assert r_users.status_code == 200
    assert any(u['id'] == user_id for u in r_users.json())
    # Update user
    r_put = await client.put(
        f'/api/v1/users/{user_id}',
        json=make_payload(userName="smokeuser", email="smoke@example.com", userStatus="I"),
    )
    assert r_put.status_code == 200
    assert r_put.json()['userStatus'] == 'I'
    # Delete user
    r_del = await client.delete(f'/api/v1/users/{user_id}')
    assert r_del.status_code == 204
    r_get = await client.get(f'/api/v1/users/{user_id}')
    assert r_get.status_code == 404

import pytest

@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_users_empty(client):
	resp = await client.get('/api/v1/users')
	assert resp.status_code == 200
	assert resp.json() == []

@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_users_ordered_by_id(client, make_payload):
	names = ["charlie", "alpha", "bravo"]
	for n in names:
		r = await client.post('/api/v1/users', json=make_payload(userName=n, email=f'{n}@example.com'))
		assert r.status_code == 201
	resp = await client.get('/api/v1/users')
	body = resp.json()
	assert [u['userName'] for u in body] == names
	assert [u['id'] for u in body] == sorted(u['id'] for u in body)

@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_user(client, make_payload):
	created = (await client.post('/api/v1/users', json=make_payload())).json()
	resp = await client.get(f"/api/v1/users/{created['id']}")
	assert resp.status_code == 200
	assert resp.json() == created

@pytest.mark.asyncio
@pytest.mark.integration
async def test_repeated_reads_are_identical(client, make_payload):
	created = (await client.post('/api/v1/users', json=make_payload())).json()
	first = (await client.get(f"/api/v1/users/{created['id']}")).json()
	second = (await client.get(f"/api/v1/users/{created['id']}")).json()
	assert first == second
	assert (await client.get('/api/v1/users')).json() == (await client.get('/api/v1/users')).json()

@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_user_not_found(client):
	resp = await client.get('/api/v1/users/12345')
	assert resp.status_code == 404

@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_user_non_integer_id(client):
	resp = await client.get('/api/v1/users/not-a-number')
	assert resp.status_code == 422

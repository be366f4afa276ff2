import pytest

@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_user(client, make_payload):
	r = await client.post('/api/v1/users', json=make_payload())
	uid = r.json()['id']
	d = await client.delete(f'/api/v1/users/{uid}')
	assert d.status_code == 204
	assert d.content == b''
	# verify gone
	gone = await client.get(f'/api/v1/users/{uid}')
	assert gone.status_code == 404

@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_unknown_user_succeeds(client):
	resp = await client.delete('/api/v1/users/424242')
	assert resp.status_code == 204

@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_rejects_non_integer_id(client):
	resp = await client.delete('/api/v1/users/abc')
	assert resp.status_code == 422

@pytest.mark.asyncio
@pytest.mark.integration
async def test_ids_not_reused_after_delete(client, make_payload):
	first = (await client.post('/api/v1/users', json=make_payload())).json()
	await client.delete(f"/api/v1/users/{first['id']}")
	second = (await client.post('/api/v1/users', json=make_payload())).json()
	assert second['id'] > first['id']

@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize('method', ['get', 'delete'])
async def test_id_beyond_64_bits_rejected(client, method):
	resp = await client.request(method.upper(), '/api/v1/users/99999999999999999999')
	assert resp.status_code == 422

@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_id_beyond_64_bits_rejected(client, make_payload):
	resp = await client.put('/api/v1/users/9223372036854775808', json=make_payload())
	assert resp.status_code == 422
	assert (await client.get('/api/v1/users')).json() == []

@pytest.mark.asyncio
@pytest.mark.integration
async def test_largest_64_bit_id_is_not_found(client):
	resp = await client.get('/api/v1/users/9223372036854775807')
	assert resp.status_code == 404

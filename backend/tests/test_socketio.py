def test_socket_connect_and_ping(sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_join_requires_existing_game(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_game', {}, namespace='/ws')
    sio_client.emit('join_game', {'game_id': 999}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert [pkt['name'] for pkt in received] == ['error', 'error']


def test_state_update_after_answer(sio_client, client, questions):
    user = client.post('/users/add', json={'username': 'Alice'}).get_json()
    game = client.post('/api/games', json={'user_id': user['id']}).get_json()

    sio_client.get_received('/ws')
    sio_client.emit('join_game', {'game_id': game['id']}, namespace='/ws')
    joined = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0]['status'] == 'in_progress' for pkt in joined)

    client.put(f"/api/games/{game['id']}/take_money")
    events = sio_client.get_received('/ws')
    updates = [pkt['args'][0] for pkt in events if pkt['name'] == 'state_update']
    assert updates == [{'game_id': game['id'], 'status': 'cashed_out', 'current_level': 0}]


def test_leave_game(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('leave_game', {'game_id': 3}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert received[0]['name'] == 'left'
    assert received[0]['args'][0] == {'room': 'game:3'}

def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_health_counts_rooms(client, registry):
    assert client.get('/health').get_json() == {'status': 'ok', 'rooms': 0}
    registry.create_room('sid-1', 'Ana', 2)
    assert client.get('/health').get_json()['rooms'] == 1


def test_room_state(client, registry):
    room = registry.create_room('sid-1', 'Ana', 2)
    registry.join_room(room.code, 'sid-2', 'Bea')
    res = client.get(f'/api/rooms/{room.code.lower()}')
    assert res.status_code == 200
    data = res.get_json()
    assert data['roomId'] == room.code
    assert data['boardSize'] == 2
    assert [p['name'] for p in data['players']] == ['Ana', 'Bea']
    assert data['gameState']['horizontalLines'] == [[False, False]] * 3
    assert data['gameState']['verticalLines'] == [[False, False, False]] * 2
    assert data['finished'] is False
    assert data['createdAt'] == room.created_at
    assert data['finishedAt'] is None


def test_unknown_room_state(client):
    res = client.get('/api/rooms/NOPE1')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Room not found'}

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_student_dashboard(client: AsyncClient, snooker_table, make_user, make_ticket):
    student = make_user(roll_no='CSE21042')
    make_ticket(student)
    await client.post(
        '/api/v1/admin/update-equipment',
        json={'equipment_id': snooker_table.id, 'status': 'in-use', 'roll_no': 'CSE21042', 'duration': '1h'},
    )

    response = await client.get(f'/api/v1/students/{student.id}/dashboard')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['open_tickets'] == 1
    assert [e['name'] for e in data['booked_items']] == ['snooker-table']
    assert data['equipment'][0]['user']['fullname'] == student.fullname
    assert data['unavailable'] == []


@pytest.mark.asyncio
async def test_unknown_student_dashboard(client: AsyncClient):
    response = await client.get('/api/v1/students/nobody/dashboard')

    assert response.status_code == 404
    assert response.json()['error_code'] == 'USER_NOT_FOUND'

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    RESERVATION_CREATE,
    RESERVATION_DELETE,
    RESERVATION_GET,
    RESERVATION_LIST,
    RESERVATION_MY,
    RESERVATION_UPDATE,
)
from src.service.dining.domain.entity.restaurant_entity import Restaurant
from src.service.dining.domain.value_object.entity_id import new_entity_id
from src.service.dining.driven_adapter.repo.in_memory_data_store import InMemoryDataStore
from test.shared.utils import auth_header


def _create(client: TestClient, token: str, restaurant_id, date: str = '2025-01-10T19:30:00Z'):
    return client.post(
        RESERVATION_CREATE.format(restaurant_id=restaurant_id),
        json={'date': date},
        headers=auth_header(token),
    )


@pytest.mark.integration
class TestCreateReservationAPI:
    def test_create_returns_wire_fields(
        self, client: TestClient, user_token: str, restaurant: Restaurant
    ):
        response = _create(client, user_token, restaurant.id)

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {'id', 'user_id', 'restaurant_id', 'date', 'updatedAt'}
        assert data['restaurant_id'] == str(restaurant.id)
        assert data['date'].startswith('2025-01-10T19:30:00')

    def test_create_then_get_round_trip(
        self, client: TestClient, user_token: str, admin_token: str, restaurant: Restaurant
    ):
        created = _create(client, user_token, restaurant.id).json()

        response = client.get(
            RESERVATION_GET.format(reservation_id=created['id']), headers=auth_header(admin_token)
        )

        assert response.status_code == 200
        assert response.json() == created

    def test_naive_date_is_taken_as_utc_wall_clock(
        self, client: TestClient, user_token: str, restaurant: Restaurant
    ):
        response = _create(client, user_token, restaurant.id, date='2025-01-10T09:00:00')

        assert response.status_code == 201
        assert response.json()['date'] == '2025-01-10T09:00:00Z'

    def test_fourth_reservation_exceeds_limit(
        self, client: TestClient, user_token: str, restaurant: Restaurant
    ):
        for hour in ('18', '19', '20'):
            response = _create(client, user_token, restaurant.id, f'2025-01-10T{hour}:00:00Z')
            assert response.status_code == 201

        response = _create(client, user_token, restaurant.id)

        assert response.status_code == 409
        assert response.json()['error'] == 'LimitExceeded'
        assert len(client.get(RESERVATION_MY, headers=auth_header(user_token)).json()) == 3

    @pytest.mark.parametrize(
        'date,expected_status',
        [
            ('2025-01-10T08:59:00Z', 422),
            ('2025-01-10T09:00:00Z', 201),
            ('2025-01-10T22:00:00Z', 201),
            ('2025-01-10T22:01:00Z', 422),
        ],
    )
    def test_operating_hours_boundaries(
        self, client: TestClient, user_token: str, restaurant: Restaurant, date, expected_status
    ):
        response = _create(client, user_token, restaurant.id, date)

        assert response.status_code == expected_status
        if expected_status == 422:
            assert response.json()['error'] == 'OutOfHours'

    @pytest.mark.parametrize('restaurant_id', ['not-a-uuid', str(new_entity_id())])
    def test_unknown_restaurant_leaves_store_untouched(
        self,
        client: TestClient,
        user_token: str,
        restaurant: Restaurant,
        memory_store: InMemoryDataStore,
        restaurant_id,
    ):
        response = _create(client, user_token, restaurant_id)

        assert response.status_code == 404
        assert response.json()['error'] == 'NotFound'
        assert memory_store.reservations == {}

    def test_invalid_body_is_bad_request(
        self, client: TestClient, user_token: str, restaurant: Restaurant
    ):
        response = client.post(
            RESERVATION_CREATE.format(restaurant_id=restaurant.id),
            json={'date': 'tomorrow evening'},
            headers=auth_header(user_token),
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'InvalidArgument'


@pytest.mark.integration
class TestReservationManagementAPI:
    @pytest.fixture
    def reservation_id(self, client: TestClient, user_token: str, restaurant: Restaurant) -> str:
        return _create(client, user_token, restaurant.id).json()['id']

    def test_my_reservations_only_lists_own(
        self,
        client: TestClient,
        user_token: str,
        another_user_token: str,
        restaurant: Restaurant,
        reservation_id: str,
    ):
        _create(client, another_user_token, restaurant.id)

        mine = client.get(RESERVATION_MY, headers=auth_header(user_token)).json()

        assert [r['id'] for r in mine] == [reservation_id]

    def test_admin_lists_everything(
        self,
        client: TestClient,
        admin_token: str,
        another_user_token: str,
        restaurant: Restaurant,
        reservation_id: str,
    ):
        _create(client, another_user_token, restaurant.id)

        response = client.get(RESERVATION_LIST, headers=auth_header(admin_token))

        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_get_by_id_is_admin_only(
        self, client: TestClient, user_token: str, reservation_id: str
    ):
        response = client.get(
            RESERVATION_GET.format(reservation_id=reservation_id), headers=auth_header(user_token)
        )

        assert response.status_code == 403

    def test_owner_reschedules(self, client: TestClient, user_token: str, reservation_id: str):
        response = client.put(
            RESERVATION_UPDATE.format(reservation_id=reservation_id),
            json={'date': '2025-02-14T20:00:00Z'},
            headers=auth_header(user_token),
        )

        assert response.status_code == 200
        assert response.json()['id'] == reservation_id
        assert response.json()['date'].startswith('2025-02-14T20:00:00')

    def test_other_user_cannot_reschedule(
        self, client: TestClient, another_user_token: str, reservation_id: str
    ):
        response = client.put(
            RESERVATION_UPDATE.format(reservation_id=reservation_id),
            json={'date': '2025-02-14T20:00:00Z'},
            headers=auth_header(another_user_token),
        )

        assert response.status_code == 403

    def test_owner_deletes_then_admin_gets_not_found(
        self, client: TestClient, user_token: str, admin_token: str, reservation_id: str
    ):
        deleted = client.delete(
            RESERVATION_DELETE.format(reservation_id=reservation_id),
            headers=auth_header(user_token),
        )
        fetched = client.get(
            RESERVATION_GET.format(reservation_id=reservation_id), headers=auth_header(admin_token)
        )

        assert deleted.status_code == 200
        assert fetched.status_code == 404

    def test_delete_frees_a_slot(
        self, client: TestClient, user_token: str, restaurant: Restaurant, reservation_id: str
    ):
        _create(client, user_token, restaurant.id)
        _create(client, user_token, restaurant.id)
        assert _create(client, user_token, restaurant.id).status_code == 409

        client.delete(
            RESERVATION_DELETE.format(reservation_id=reservation_id),
            headers=auth_header(user_token),
        )

        assert _create(client, user_token, restaurant.id).status_code == 201

    def test_delete_malformed_id_is_not_found(self, client: TestClient, user_token: str):
        response = client.delete(
            RESERVATION_DELETE.format(reservation_id='garbage'), headers=auth_header(user_token)
        )

        assert response.status_code == 404

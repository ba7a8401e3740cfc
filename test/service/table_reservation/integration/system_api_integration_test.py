from fastapi.testclient import TestClient
import pytest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import HEALTH, METRICS
from test.shared.utils import create_reservation, login_user
from test.util_constant import DEFAULT_PASSWORD, TEST_CUSTOMER_EMAIL, TEST_DATE, TEST_TIME


class TestSystemEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get(HEALTH)
        assert response.status_code == 200
        assert response.json() == {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @pytest.mark.usefixtures('seeded_tables')
    def test_metrics_expose_allocation_outcomes(
        self, client: TestClient, customer_user: dict
    ) -> None:
        login_user(client, TEST_CUSTOMER_EMAIL, DEFAULT_PASSWORD)
        create_reservation(client, date=TEST_DATE, time=TEST_TIME, party_size=2)
        create_reservation(client, date=TEST_DATE, time=TEST_TIME, party_size=99)

        response = client.get(METRICS)

        assert response.status_code == 200
        text = response.text
        assert 'table_allocation_requests_total{' in text
        assert 'result="committed"' in text
        assert 'result="no_capacity"' in text
        assert 'table_allocation_duration_seconds_bucket' in text

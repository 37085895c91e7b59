from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from smart_sac.config.settings import Settings
from smart_sac.core.exceptions import ErrorCode, create_validation_error
from smart_sac.core.pagination import count_pages, normalize_pagination
from smart_sac.schemas.equipment import EquipmentStatusUpdate
from smart_sac.utils.datetime_utils import DateTimeHelper


class TestEquipmentStatusUpdate:

    def test_in_use_payload(self):
        payload = EquipmentStatusUpdate(equipment_id='eq-1', status='in-use', roll_no=' CSE21042 ', duration='1h')

        assert payload.status == 'in-use'
        assert payload.roll_no == 'CSE21042'

    def test_blank_occupancy_fields_become_none(self):
        payload = EquipmentStatusUpdate(equipment_id='eq-1', status='broken', roll_no='  ', duration='')

        assert payload.roll_no is None
        assert payload.duration is None

    @pytest.mark.parametrize('fields', [{'roll_no': 'CSE21042'}, {'duration': '1h'}, {}])
    def test_in_use_requires_occupancy(self, fields):
        with pytest.raises(PydanticValidationError):
            EquipmentStatusUpdate(equipment_id='eq-1', status='in-use', **fields)

    def test_unknown_status(self):
        with pytest.raises(PydanticValidationError):
            EquipmentStatusUpdate(equipment_id='eq-1', status='missing')


class TestPagination:

    @pytest.mark.parametrize('page, expected', [(None, 1), (0, 1), (-3, 1), (4, 4)])
    def test_normalize_page(self, page, expected):
        assert normalize_pagination(page, 10).page == expected

    def test_offset(self):
        params = normalize_pagination(3, 10)

        assert params.offset == 20
        assert params.limit == 10

    @pytest.mark.parametrize('total, pages', [(0, 0), (1, 1), (10, 1), (11, 2), (23, 3)])
    def test_count_pages(self, total, pages):
        assert count_pages(total, 10) == pages


def test_add_months_clamps_to_month_end():
    value = datetime(2025, 11, 30, 12, 0, tzinfo=timezone.utc)

    assert DateTimeHelper.add_months(value, 3) == datetime(2026, 2, 28, 12, 0, tzinfo=timezone.utc)


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2026, 1, 1, 8, 30)

    assert DateTimeHelper.as_utc(naive).tzinfo == timezone.utc


def test_validation_error_collects_field_errors():
    error = create_validation_error({'roll_no': ['required'], 'duration': ['required']})

    assert error.status_code == 400
    assert error.error_code == ErrorCode.VALIDATION_ERROR
    assert error.details['field_errors']['roll_no'] == ['required']
    assert '2 error(s)' in error.message


class TestSettings:

    def test_reads_documented_variable_names(self, monkeypatch):
        monkeypatch.setenv('APP_NAME', 'Activity Center')
        monkeypatch.setenv('API_VERSION', 'v2')
        monkeypatch.setenv('CORS_ORIGINS', 'http://localhost:3000, http://localhost:5173')

        configured = Settings()

        assert configured.APP_NAME == 'Activity Center'
        assert configured.API_VERSION == 'v2'
        assert configured.CORS_ORIGINS == ['http://localhost:3000', 'http://localhost:5173']

    def test_accepts_legacy_variable_names(self, monkeypatch):
        monkeypatch.setenv('PROJECT_NAME', 'Activity Center')
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["http://localhost:3000"]')

        configured = Settings()

        assert configured.APP_NAME == 'Activity Center'
        assert configured.CORS_ORIGINS == ['http://localhost:3000']

"""Shared pytest fixtures for the crime dashboard tests."""

import pytest


@pytest.fixture
def sample_records():
    """A small mixed sample shaped like the LA open data API response."""
    return [
        {"dr_no": "210104001", "crm_cd_desc": "VEHICLE - STOLEN", "area_name": "77th Street",
         "date_rptd": "2021-01-04T00:00:00.000"},
        {"dr_no": "210104002", "crm_cd_desc": "BATTERY - SIMPLE ASSAULT", "area_name": "Central",
         "date_rptd": "2021-01-20T00:00:00.000"},
        {"dr_no": "210104003", "crm_cd_desc": "VEHICLE - STOLEN", "area_name": "Central",
         "date_rptd": "2021-02-02T00:00:00.000"},
        {"dr_no": "210104004", "crm_cd_desc": "VEHICLE - STOLEN", "area_name": "Hollywood",
         "date_rptd": "2020-12-31T00:00:00.000"},
        {"dr_no": "210104005", "date_rptd": "not a date"},
        {"dr_no": "210104006", "crm_cd_desc": "BATTERY - SIMPLE ASSAULT", "area_name": "Central"},
    ]

"""Shared payload fixtures, one per response shape the service has sent."""

import pytest

from pdf_table_extractor.session import SessionState


@pytest.fixture
def current_payload():
    return {
        "tables": [
            {
                "source": "Policy Illustration",
                "page": 3,
                "keyword": "Guaranteed Values",
                "extractor": "PyMuPDF",
                "data": [
                    {"Year": 1, "Age": 45, "Premium": "1,200.00"},
                    {"Year": 2, "Age": 46, "Premium": "1,200.00"},
                    {"Year": 3, "Age": 47, "Premium": None},
                ],
            },
            {
                "keyword": "Surrender Value",
                "extractor": "pdfplumber",
                "data": [{"Value": 10.5}],
            },
        ],
        "fields": {
            "illustration_date": "2024-01-15",
            "insured_name": "Jane Doe",
            "initial_death_benefit": "$500,000",
            "assumed_ror": None,
            "minimum_initial_pmt": "$1,200",
        },
        "message": "Extraction complete.",
    }


@pytest.fixture
def legacy_payload():
    return {
        "tables": [
            {
                "source_text": "Summary of Benefits",
                "page_number": 2,
                "data": [
                    {"Benefit": "Death", "Amount": 500000, "Source_Text": "Summary of Benefits", "Page_Number": 2},
                    {"Benefit": "Rider", "Amount": None, "Source_Text": "Summary of Benefits", "Page_Number": 2},
                ],
            }
        ],
        "message": None,
    }


@pytest.fixture
def tables_by_text_payload():
    return {
        "tables_by_text": {
            "Annual Premium": {
                "headers": ["Year", "", "Premium", "Premium"],
                "rows": [["1", "a", "100", "110"], ["2", "b"]],
            }
        }
    }


@pytest.fixture
def session():
    return SessionState()

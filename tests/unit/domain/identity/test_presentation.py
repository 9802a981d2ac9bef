"""Unit tests for date formatting, the photo prompt and the permit card view."""

from datetime import date, datetime

import pytest

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.util.card import ISSUING_AUTHORITY, PermitCard, export_filename
from permitgen.domain.identity.util.formatting import format_date, format_number
from permitgen.domain.identity.util.prompt import build_prompt


def _make_record(**overrides) -> IdentityRecord:
    data = dict(
        name="Layla",
        surname="Haddad",
        nationality="Syrian",
        birthdate=datetime(1990, 5, 17),
        mother_name="Mariam",
        father_name="Omar",
        id_number=99123456780,
        permit_type="Short Term",
        valid_from=datetime(2024, 3, 7),
        valid_until=None,
        gender="female",
        age=34,
    )
    data.update(overrides)
    return IdentityRecord(**data)


class TestFormatDate:
    def test_date_rendered_day_month_year(self):
        assert format_date(date(2024, 3, 7)) == "07.03.2024"

    def test_datetime_rendered_without_time(self):
        assert format_date(datetime(2024, 12, 31, 23, 59)) == "31.12.2024"

    def test_string_passed_through(self):
        assert format_date("N/A-custom") == "N/A-custom"

    @pytest.mark.parametrize("value", [None, 45123, 3.5, ["2024-03-07"]])
    def test_other_values_not_available(self, value):
        assert format_date(value) == "N/A"


class TestFormatNumber:
    def test_integral_float_drops_fraction(self):
        assert format_number(34.0) == "34"

    def test_other_values_unchanged(self):
        assert format_number(34.5) == "34.5"
        assert format_number("thirty") == "thirty"


class TestBuildPrompt:
    def test_prompt_uses_age_gender_nationality(self):
        prompt = build_prompt(_make_record())
        assert prompt.startswith(
            "Professional passport photograph of a 34-year-old female person of Syrian descent."
        )
        assert "No smiling, no glasses, no hats, no accessories." in prompt

    def test_prompt_is_deterministic(self):
        assert build_prompt(_make_record()) == build_prompt(_make_record())

    def test_prompt_ignores_other_fields(self):
        assert build_prompt(_make_record()) == build_prompt(_make_record(name="Other", surname="X"))


class TestPermitCard:
    def test_front_fields(self):
        card = PermitCard.from_record(_make_record())
        values = {f.label: f.value for f in card.front}
        assert values["Soyadı / Surname"] == "HADDAD"
        assert values["Doğum Tarihi / Date of Birth"] == "17.05.1990"
        assert values["Yabancı Kimlik Numarası / Foreigner ID Number"] == "99123456780"

    def test_back_fields(self):
        card = PermitCard.from_record(_make_record())
        values = {f.label: f.value for f in card.back}
        assert values["Veren Makam / Issuing Authority"] == ISSUING_AUTHORITY
        assert values["Geçerlilik Tarihleri / Valid From - Until"] == "07.03.2024 - N/A"

    def test_card_carries_photo(self):
        record = _make_record().begin_generation().complete_generation("data:image/png;base64,AAAA")
        assert PermitCard.from_record(record).photo_url == "data:image/png;base64,AAAA"

    def test_export_filename(self):
        assert export_filename(_make_record()) == "residence_permit_Layla_Haddad.png"
        assert export_filename(_make_record(), "jpeg") == "residence_permit_Layla_Haddad.jpeg"

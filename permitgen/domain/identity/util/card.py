"""Presentation view of a residence permit card.

The visual layout and rasterising belong to the renderer; this module only
decides which labelled values appear on each side of the card and what the
exported artifact is called.
"""

from pydantic import BaseModel

from permitgen.domain.identity.model.record import IdentityRecord
from permitgen.domain.identity.util.formatting import format_date

ISSUING_AUTHORITY = "GÖÇ İDARESİ GENEL MÜDÜRLÜĞÜ"
LEGAL_NOTICE = (
    "Bu belge sahibine Türkiye'de yasal kalış hakkı sağlar. / "
    "This document grants its holder the right of legal stay in Turkey."
)


class CardField(BaseModel):
    label: str
    value: str


class PermitCard(BaseModel):
    holder: str
    photo_url: str | None
    front: list[CardField]
    back: list[CardField]
    notice: str = LEGAL_NOTICE

    @classmethod
    def from_record(cls, record: IdentityRecord) -> "PermitCard":
        front = [
            CardField(label="Soyadı / Surname", value=str(record.surname).upper()),
            CardField(label="Adı / Name", value=str(record.name).upper()),
            CardField(label="Uyruğu / Nationality", value=str(record.nationality).upper()),
            CardField(label="Doğum Tarihi / Date of Birth", value=format_date(record.birthdate)),
            CardField(
                label="Yabancı Kimlik Numarası / Foreigner ID Number",
                value=str(record.id_number),
            ),
        ]
        back = [
            CardField(
                label="İkamet İzni Türü / Type of Residence Permit",
                value=str(record.permit_type).upper(),
            ),
            CardField(label="Anne Adı / Mother's Name", value=str(record.mother_name).upper()),
            CardField(label="Baba Adı / Father's Name", value=str(record.father_name).upper()),
            CardField(label="Veren Makam / Issuing Authority", value=ISSUING_AUTHORITY),
            CardField(
                label="Geçerlilik Tarihleri / Valid From - Until",
                value=f"{format_date(record.valid_from)} - {format_date(record.valid_until)}",
            ),
        ]
        return cls(holder=record.full_name, photo_url=record.photo_url, front=front, back=back)


def export_filename(record: IdentityRecord, fmt: str = "png") -> str:
    return f"residence_permit_{record.name}_{record.surname}.{fmt}"

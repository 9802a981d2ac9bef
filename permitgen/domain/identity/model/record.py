from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from permitgen.domain.identity.model.value import (
    GenerationFailure,
    GenerationState,
    GenerationStatus,
)
from permitgen.domain.shared.error import InvalidStateError

# Column order matters: missing columns are reported in this order.
REQUIRED_COLUMNS: tuple[str, ...] = (
    "Name",
    "Surname",
    "Nationality",
    "Birthdate",
    "MotherName",
    "FatherName",
    "IDNumber",
    "PermitType",
    "ValidFrom",
    "ValidUntil",
    "Gender",
    "Age",
)


class IdentityRecord(BaseModel):
    """One spreadsheet row plus its photo enrichment state.

    Cell values are kept exactly as the reader produced them (strings,
    numbers, datetimes). Only ``photo_url`` and ``generation`` ever change,
    and they change by producing a new record through the transition methods.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Any = Field(alias="Name")
    surname: Any = Field(alias="Surname")
    nationality: Any = Field(alias="Nationality")
    birthdate: Any = Field(alias="Birthdate")
    mother_name: Any = Field(alias="MotherName")
    father_name: Any = Field(alias="FatherName")
    id_number: Any = Field(alias="IDNumber")
    permit_type: Any = Field(alias="PermitType")
    valid_from: Any = Field(alias="ValidFrom")
    valid_until: Any = Field(alias="ValidUntil")
    gender: Any = Field(alias="Gender")
    age: Any = Field(alias="Age")
    extras: dict[str, Any] = {}  # non-required columns, carried along untouched

    photo_url: str | None = None
    generation: GenerationState = GenerationState()

    @model_validator(mode="after")
    def _photo_only_when_completed(self) -> "IdentityRecord":
        completed = self.generation.status == GenerationStatus.COMPLETED
        if completed != (self.photo_url is not None):
            raise ValueError("photo_url must be set exactly when generation is completed")
        return self

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"

    def _require_in_progress(self) -> None:
        if self.generation.status != GenerationStatus.IN_PROGRESS:
            raise InvalidStateError(
                f"Generation can only finish from in_progress, currently {self.generation.status}"
            )

    def begin_generation(self) -> "IdentityRecord":
        if not self.generation.accepts_request:
            raise InvalidStateError(
                f"Cannot start generation in {self.generation.status} state"
            )
        return self.model_copy(
            update={"generation": GenerationState(status=GenerationStatus.IN_PROGRESS)}
        )

    def complete_generation(self, photo_url: str) -> "IdentityRecord":
        self._require_in_progress()
        return self.model_copy(
            update={
                "photo_url": photo_url,
                "generation": GenerationState(status=GenerationStatus.COMPLETED),
            }
        )

    def fail_generation(self, failure: GenerationFailure) -> "IdentityRecord":
        self._require_in_progress()
        return self.model_copy(
            update={
                "photo_url": None,
                "generation": GenerationState(status=GenerationStatus.FAILED, failure=failure),
            }
        )

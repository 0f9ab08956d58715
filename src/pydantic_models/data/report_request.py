from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MAX_DAY = 31

# Kürzel werden unverändert in die Zelle geschrieben, Zahlen bleiben Zahlen
TimeOffCode = Union[int, float, str]


class EmployeeRecord(BaseModel):
    """
    Eine Mitarbeiterzeile des Reports.
    time_offs bildet Tag (1..31) auf ein Kürzel ab; fehlende Tage bleiben leer.
    uid und name dürfen null sein, die Zelle bleibt dann leer.
    """
    uid: Optional[Union[int, str]]
    name: Optional[str]
    time_offs: Dict[int, TimeOffCode] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("time_offs", "timeOffs"),
    )

    @field_validator("time_offs", mode="before")
    @classmethod
    def drop_null_codes(cls, v: Optional[Dict[str, Optional[TimeOffCode]]]) -> Dict[str, TimeOffCode]:
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {key: code or "" for key, code in v.items()}

    @field_validator("time_offs")
    @classmethod
    def days_in_range(cls, v: Dict[int, TimeOffCode]) -> Dict[int, TimeOffCode]:
        for day in v:
            if not 1 <= day <= MAX_DAY:
                raise ValueError(f"Tag {day} liegt ausserhalb von 1..{MAX_DAY}")
        return dict(sorted(v.items()))

    def codes_by_day(self) -> List[tuple[int, TimeOffCode]]:
        """Kürzel nach Tag aufsteigend, leere Kürzel ausgelassen."""
        return [(day, code) for day, code in sorted(self.time_offs.items()) if code]


class ReportRequest(BaseModel):
    """
    Eingabe für /generate.
    Die JSON-Namen (officeName, dateFrom, dateTo) und die Python-Namen werden akzeptiert.
    """
    model_config = ConfigDict(populate_by_name=True)

    office_name: str = Field(alias="officeName")
    date_from: str = Field(alias="dateFrom")
    date_to: str = Field(alias="dateTo")
    items: List[EmployeeRecord]

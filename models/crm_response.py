# models/crm_response.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Dict, List, Literal, Optional, Union


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class FieldDescriptor(_Frozen):
    """One field as described by getFields"""
    required: bool = False
    type: str = ""
    read_only: bool = False
    max_length: int = 0
    label: str = ""
    display_value: str = ""
    is_custom_field: bool = False
    enumerated_values: Optional[List[str]] = None


class SuccessOutcome(_Frozen):
    status: Literal["success"] = "success"
    code: str
    fields: Dict[str, str] = {}


class FailureOutcome(_Frozen):
    status: Literal["error"] = "error"
    code: str
    message: str


class RecordIdEntry(_Frozen):
    record_id: str


# A record field is either plain text or a compound value:
# sub-row number -> sub-field name -> text
RecordValue = Union[str, Dict[str, Dict[str, str]]]


class EmptyRecordSet(_Frozen):
    kind: Literal["empty"] = "empty"

    def __len__(self) -> int:
        return 0


class FieldMetadataSet(_Frozen):
    kind: Literal["field_metadata"] = "field_metadata"
    sections: Dict[str, Dict[str, FieldDescriptor]] = {}

    def __len__(self) -> int:
        return sum(len(fields) for fields in self.sections.values())


class UserSet(_Frozen):
    kind: Literal["users"] = "users"
    users: Dict[str, Dict[str, str]] = {}

    def __len__(self) -> int:
        return len(self.users)


class RowRecordSet(_Frozen):
    kind: Literal["rows"] = "rows"
    rows: Dict[str, Dict[str, RecordValue]] = {}

    def __len__(self) -> int:
        return len(self.rows)


class FieldMapList(_Frozen):
    kind: Literal["field_maps"] = "field_maps"
    records: List[Dict[str, str]] = []

    def __len__(self) -> int:
        return len(self.records)


def position_sort_key(position: str):
    """Numeric row numbers first, in numeric order; anything else after, by text"""
    try:
        return (0, int(position), position)
    except ValueError:
        return (1, 0, position)


class OutcomeSet(_Frozen):
    """Per-row outcomes of a bulk insert/update, ascending by row number"""
    kind: Literal["outcomes"] = "outcomes"
    outcomes: Dict[str, Annotated[Union[SuccessOutcome, FailureOutcome], Field(discriminator="status")]] = {}

    @field_validator("outcomes")
    @classmethod
    def sort_by_position(cls, v):
        # Callers line outcomes up with the batch they submitted
        return {key: v[key] for key in sorted(v, key=position_sort_key)}

    def __len__(self) -> int:
        return len(self.outcomes)


class IdList(_Frozen):
    kind: Literal["ids"] = "ids"
    ids: List[RecordIdEntry] = []

    def __len__(self) -> int:
        return len(self.ids)


class FlatFieldMap(_Frozen):
    kind: Literal["flat"] = "flat"
    fields: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.fields)


RecordSet = Annotated[
    Union[
        EmptyRecordSet,
        FieldMetadataSet,
        UserSet,
        RowRecordSet,
        FieldMapList,
        OutcomeSet,
        IdList,
        FlatFieldMap,
    ],
    Field(discriminator="kind"),
]


class NormalizedResult(_Frozen):
    """Uniform view of one CRM API response, whatever shape it came in"""
    module_name: str
    operation_name: str
    raw_document: str
    resource_uri: Optional[str] = None
    status_message: Optional[str] = None
    status_code: Optional[str] = None
    primary_record_id: Optional[str] = None
    records: RecordSet = EmptyRecordSet()

    @property
    def related_records(self):
        return self.records

    def looks_successful(self) -> bool:
        """
        Loose check for "success" anywhere in the status message.
        The service words its messages inconsistently, so only use this for logging.
        """
        if self.status_message is None:
            return False
        return "success" in self.status_message

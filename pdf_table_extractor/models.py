from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

CellValue = Union[str, int, float, None]
TableRow = Dict[str, CellValue]

SOURCE_TEXT_KEY = 'Source_Text'
PAGE_NUMBER_KEY = 'Page_Number'
RESERVED_KEYS = frozenset({SOURCE_TEXT_KEY, PAGE_NUMBER_KEY})

KNOWN_EXTRACTORS = ('PyMuPDF', 'pdfplumber')

FIELD_LABELS = {
    'illustration_date': 'Illustration Date',
    'insured_name': 'Insured Name',
    'initial_death_benefit': 'Initial Death Benefit',
    'assumed_ror': 'Assumed ROR',
    'minimum_initial_pmt': 'Minimum Initial Payment',
}


class TableMetadata(BaseModel):
    """Provenance of one extracted table, as reported by the service."""

    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None
    page: Optional[Union[int, float, str]] = None
    keyword: Optional[str] = None
    extractor: Optional[str] = None

    @property
    def is_known_extractor(self) -> bool:
        return self.extractor in KNOWN_EXTRACTORS


class Table(BaseModel):
    """Canonical, version-independent snapshot of one extracted table."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    columns: List[str] = Field(default_factory=list)
    rows: List[TableRow] = Field(default_factory=list)
    metadata: Optional[TableMetadata] = None

    @property
    def columnless(self) -> bool:
        return not self.columns


class FieldSet(BaseModel):
    """Summary attributes extracted alongside the tables.

    Every known attribute is always present; absence is ``None``. Attributes
    the service adds later are kept as extra fields.
    """

    model_config = ConfigDict(frozen=True, extra='allow')

    illustration_date: Optional[str] = None
    insured_name: Optional[str] = None
    initial_death_benefit: Optional[str] = None
    assumed_ror: Optional[str] = None
    minimum_initial_pmt: Optional[str] = None

    def entries(self) -> List[Tuple[str, Optional[str]]]:
        return list(self.model_dump().items())

    def get(self, name: str) -> Optional[str]:
        return self.model_dump().get(name)


class ExtractionResult(NamedTuple):
    tables: List[Table]
    fields: Optional[FieldSet]
    message: Optional[str]


def field_label(name: str) -> str:
    return FIELD_LABELS.get(name, name.replace('_', ' ').title())


"""Census upload and row models.

A census is the uploaded employee roster for a client. The upload record keeps
the original column list; each row keeps the raw cell mapping exactly as
parsed, keyed by the raw header text.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CensusUpload(BaseModel):
    """A single census file saved for a client."""

    id: str
    client_id: str
    file_id: Optional[str] = None
    file_name: str
    uploaded_at: datetime
    columns: list[str] = Field(default_factory=list)
    row_count: int = 0

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class CensusRow(BaseModel):
    """One employee row; ``row_index`` is its zero-based position in the file."""

    census_upload_id: str = ""
    row_index: int
    data: dict[str, Any] = Field(default_factory=dict)

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class CensusWithRows(BaseModel):
    """An upload together with all of its rows in file order."""

    upload: CensusUpload
    rows: list[CensusRow] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class QualityHistoryEntry(BaseModel):
    """Quality scores of one validated upload, for a client's trend view."""

    census_upload_id: str
    file_name: str
    uploaded_at: datetime
    validated_at: datetime
    peo_score: int
    aca_score: int
    total_rows: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

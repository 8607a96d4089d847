"""
Base model for rows read from the Supabase tables.

Rows are flat JSON objects returned by PostgREST. Embedded relations
(e.g. ``districts(name)``) arrive as nested objects and are modelled as
optional nested fields on the owning row.
"""

from pydantic import BaseModel, ConfigDict


class TableRow(BaseModel):
    """
    Base class for table rows.

    Extra columns are kept so that schema additions on the database side do
    not break reads.
    """

    model_config = ConfigDict(extra="allow", from_attributes=True)

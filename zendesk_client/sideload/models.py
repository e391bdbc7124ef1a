"""Data models for side-load join maps."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class SideLoadMapping(BaseModel):
    """Declarative rule joining a sibling dataset into primary records.

    A mapping reads `field` on every primary record, looks the value up in
    `envelope[dataset]` by `data_key` and stores the match under `name`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    field: Annotated[
        str, Field(min_length=1, description="Join field on the primary record")
    ]
    name: Annotated[
        str, Field(min_length=1, description="Destination field to populate")
    ]
    dataset: Annotated[
        str, Field(min_length=1, description="Sibling collection in the envelope")
    ]
    data_key: Annotated[
        str, Field(min_length=1, description="Key matched on sibling records")
    ] = "id"
    array: bool = Field(
        default=False, description="Attach every match instead of the first one"
    )
    all: bool = Field(  # noqa: A003
        default=False, description="Attach the whole dataset without filtering"
    )

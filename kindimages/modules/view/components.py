"""Display components rendered by the host."""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class GridActionType(str, Enum):
    PRIMARY = "primary"
    DANGER = "danger"


class Text(BaseModel):
    kind: Literal["text"] = "text"
    value: str


class Confirmation(BaseModel):
    title: str
    body: str


class GridAction(BaseModel):
    """A button attached to a table row."""

    name: str
    action_path: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    type: GridActionType = GridActionType.PRIMARY
    confirmation: Optional[Confirmation] = None


class TableRow(BaseModel):
    cells: Dict[str, Text] = Field(default_factory=dict)
    actions: List[GridAction] = Field(default_factory=list)

    def add_action(self, action: GridAction) -> None:
        self.actions.append(action)


class Table(BaseModel):
    kind: Literal["table"] = "table"
    title: str
    placeholder: str
    columns: List[str]
    rows: List[TableRow] = Field(default_factory=list)
    loading: bool = False

    def add(self, row: TableRow) -> None:
        self.rows.append(row)


class Section(BaseModel):
    """One full-width band of the page."""

    components: List[Union[Table, Text]] = Field(default_factory=list)


class ContentResponse(BaseModel):
    title: str
    sections: List[Section] = Field(default_factory=list)

    def add_section(self, *components: Union[Table, Text]) -> Section:
        section = Section(components=list(components))
        self.sections.append(section)
        return section

"""Document text model produced by PDF extraction and consumed per question."""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


PARAGRAPH_BREAK = "\n\n"


class PageContent(BaseModel):
    """Text recovered from a single PDF page."""
    model_config = ConfigDict(frozen=True)

    page_number: int  # 1-indexed physical page number
    text: str

    @field_validator('page_number')
    @classmethod
    def validate_page_number(cls, v: int) -> int:
        """Ensure page numbers are 1-based."""
        if v < 1:
            raise ValueError('page_number must be >= 1')
        return v

    @field_validator('text')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Pages without text are never stored."""
        if not v.strip():
            raise ValueError('page text must be non-empty')
        return v


class DocumentText(BaseModel):
    """Full text and per-page text of the uploaded document. Immutable."""
    model_config = ConfigDict(frozen=True)

    full_text: str = ""
    pages: tuple[PageContent, ...] = Field(default_factory=tuple)

    @model_validator(mode='after')
    def validate_page_order(self) -> "DocumentText":
        """Ensure page numbers are strictly increasing."""
        numbers = [p.page_number for p in self.pages]
        if any(b <= a for a, b in zip(numbers, numbers[1:])):
            raise ValueError('page numbers must be strictly increasing')
        return self

    @classmethod
    def from_pages(cls, pages: list[PageContent]) -> "DocumentText":
        """Build the model from kept pages, joining their text with paragraph breaks."""
        full_text = PARAGRAPH_BREAK.join(p.text for p in pages).strip()
        return cls(full_text=full_text, pages=tuple(pages))

    @classmethod
    def empty(cls) -> "DocumentText":
        return cls()

    @property
    def has_text(self) -> bool:
        return bool(self.full_text.strip())

    @property
    def page_numbers(self) -> list[int]:
        return [p.page_number for p in self.pages]


class ContextSelection(BaseModel):
    """Text window selected for a question and the pages it came from."""
    context: str = ""
    pages: list[int] = Field(default_factory=list)  # sorted, unique

    @field_validator('pages')
    @classmethod
    def sort_pages(cls, v: list[int]) -> list[int]:
        """Ensure pages are sorted and de-duplicated."""
        return sorted(set(v))

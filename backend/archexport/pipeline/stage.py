from abc import ABC, abstractmethod

from archexport.ir.model import Document
from archexport.parsing.markdown import TableRow, parse_tables
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.rows import add_gap_element, is_gap_row


class ExtractionStage(ABC):
    """
    Turns one routed document into elements and relationships.

    Must:
    - read the document and the context
    - write only to the context
    - never raise on unrecognised content
    """

    name: str

    def extract(self, context: ExtractionContext, document: Document) -> None:
        for table in parse_tables(document.content):
            for row in table:
                # Gap-analysis rows mean the same thing in every phase
                if is_gap_row(row):
                    add_gap_element(context, row, document.name)
                    continue
                self.extract_row(context, document, row)

        self.extract_document(context, document)

    @abstractmethod
    def extract_row(
        self,
        context: ExtractionContext,
        document: Document,
        row: TableRow,
    ) -> None:
        pass

    def extract_document(self, context: ExtractionContext, document: Document) -> None:
        """Hook for non-table content (headings, flowcharts, derived elements)."""

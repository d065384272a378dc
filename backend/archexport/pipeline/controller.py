import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

from archexport.compiler.layout import generate_views
from archexport.config import DEFAULT_MODEL_NAME, GENERATOR_VERSION
from archexport.ir.errors import InvalidDocumentError
from archexport.ir.model import Document, Model, ModelMetadata
from archexport.pipeline.context import ExtractionContext
from archexport.pipeline.inference_stage import CrossLayerInferenceStage
from archexport.pipeline.router import PhaseRouter

logger = logging.getLogger(__name__)

DocumentInput = Union[Document, tuple]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def coerce_documents(documents: Optional[Iterable[DocumentInput]]) -> List[Document]:
    if documents is None or isinstance(documents, (str, bytes)):
        raise InvalidDocumentError("documents must be a list of (name, content) pairs")
    return [Document.coerce(item) for item in documents]


class PipelineController:
    """
    One extraction run: route every document, run its extractor, infer
    cross-layer links, then lay out the views.

    A controller holds no per-run state; every call to ``run`` gets a
    fresh ``ExtractionContext`` (and so a fresh id counter).
    """

    def __init__(self, router: Optional[PhaseRouter] = None):
        self.router = router or PhaseRouter()
        self.inference_stage = CrossLayerInferenceStage()

    def extract(self, documents: List[Document]) -> ExtractionContext:
        context = ExtractionContext(documents=documents)

        for document in documents:
            stage = self.router.route(document)
            if stage is None:
                continue
            before = len(context.elements)
            stage.extract(context, document)
            logger.debug(
                "%s: %d element(s) from %s",
                stage.name,
                len(context.elements) - before,
                document.name,
            )

        self.inference_stage.run(context)
        return context

    def run(
        self,
        documents: Optional[Iterable[DocumentInput]],
        name: Optional[str] = None,
        exported_at: Optional[str] = None,
    ) -> Model:
        docs = coerce_documents(documents)
        context = self.extract(docs)
        views = generate_views(context.elements, context.relationships)

        model = Model(
            name=name or DEFAULT_MODEL_NAME,
            documentation=f'Exported from TOGAF vault "{name or "unknown"}" by archexport',
            elements=tuple(context.elements),
            relationships=tuple(context.relationships),
            views=views,
            metadata=ModelMetadata(
                exported_at=exported_at or utc_timestamp(),
                document_count=len(docs),
                generator_version=GENERATOR_VERSION,
            ),
        )

        logger.info(
            "Extracted %d elements, %d relationships, %d views from %d documents",
            len(model.elements),
            len(model.relationships),
            len(model.views),
            len(docs),
        )
        return model


def extract_model(
    documents: Optional[Iterable[DocumentInput]],
    name: Optional[str] = None,
    exported_at: Optional[str] = None,
) -> Model:
    return PipelineController().run(documents, name=name, exported_at=exported_at)
